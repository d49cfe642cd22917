"""FastAPI delivery surface."""
