"""Output layer — render a ServiceResult for humans (Rich) or machines (JSON)."""
