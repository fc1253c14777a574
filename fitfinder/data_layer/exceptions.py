"""Custom exceptions for the fitness explorer."""


class ExerciseNotFoundError(Exception):
    """Raised when an exercise id is not in the catalog."""

    def __init__(self, exercise_id: str):
        """Initialize exception with exercise id.

        Args:
            exercise_id: Id of the exercise that was not found
        """
        self.exercise_id = exercise_id
        super().__init__(f"Exercise '{exercise_id}' not found in catalog")


class StorageError(Exception):
    """Raised when the local store cannot be written."""
