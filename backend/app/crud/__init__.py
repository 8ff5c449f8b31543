from .crud_progress import progress
from .crud_streak import streak
