"""
API Layer - FastAPI Presentation Layer

Responsibility:
    HTTP interface for the grader. Translates requests into AnswerEvaluator
    calls. No business logic.

Contains:
    - FastAPI app factory and lifespan (evaluator initialize/dispose)
    - Grading router
    - Shared error schema
"""
