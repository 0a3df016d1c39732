"""Application constants."""

# Signup validation
MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 6

# User search (partner picker)
USER_SEARCH_LIMIT = 10

# Goal progress is displayed as a percentage in this range
PROGRESS_MIN = 0
PROGRESS_MAX = 100
