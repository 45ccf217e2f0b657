"""
DTO package.

Cross-layer contracts between services, workflows and callers.
"""
