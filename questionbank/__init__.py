"""
QuestionBank - Cascading-selection quiz application.

Subpackages:
- schemas: Pydantic models (questions, catalog, session, snapshot)
- classroom: catalog loading, sequencing, grading, progress, controller
- viewer: HTML rendering for the Streamlit app
"""

__version__ = "0.1.0"
