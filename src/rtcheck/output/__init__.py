"""Output layer — rendering ServiceResult for terminals and pipes."""
