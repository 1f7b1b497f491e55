"""Field bounds shared by request validation and storage."""

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 50
MIN_PASSWORD_LENGTH = 6

MAX_TITLE_LENGTH = 100
MAX_CONTENT_LENGTH = 10_000
MAX_TAG_LENGTH = 20
