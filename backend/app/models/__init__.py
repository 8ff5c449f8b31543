# This file makes the 'models' directory a Python package.

from .user_progress import UserProgress
from .user_streak import UserStreak
