"""
exam_grader - Descriptive answer grading for engineering exams.

Grades a student's free-text answer against a model answer with a
sentence-embedding model, falling back to deterministic heuristics when
the model is not available.

Layers:
    - domain: value objects, scoring services, configuration tables
    - application: AnswerEvaluator facade and its settings
    - infrastructure: sentence-transformers embedding backend
    - api: FastAPI application
"""

__version__ = "1.0.0"
