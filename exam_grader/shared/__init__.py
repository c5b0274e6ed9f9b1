"""
Shared Utilities

Responsibility:
    Cross-cutting helpers used across all layers.

Does NOT contain:
    - Business logic
    - Infrastructure implementations
"""
