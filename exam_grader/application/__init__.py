"""
Application Layer - Evaluator Facade

Responsibility:
    Coordinates the grading flow between callers (API, CLI) and the Domain
    layer. Owns the embedding model lifecycle and the AI/manual degradation
    protocol.

Contains:
    - AnswerEvaluator: facade (initialize / evaluate / evaluate_batch / dispose)
    - EvaluatorSettings: runtime knobs (timeouts, retries, batch pacing)
    - EvaluatorState / EvaluatorStatus: lifecycle enum and status snapshot

Does NOT contain:
    - Scoring rules (belongs to Domain layer)
    - HTTP handling (belongs to API layer)
    - Model loading details (belongs to Infrastructure layer)
"""
