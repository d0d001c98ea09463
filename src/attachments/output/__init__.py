"""Output layer — ServiceResult rendering for humans and machines."""
