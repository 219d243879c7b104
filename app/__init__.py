"""Trading rule compliance service.

Layers follow the usual split: ``domain`` holds entities and the rule
evaluator, ``infrastructure`` the SQLAlchemy models and repositories,
``application`` the use cases and ``interfaces`` the FastAPI routes.
"""
