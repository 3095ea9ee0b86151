from enum import Enum


DEFAULT_PRIORITY = "normal"
PRIORITY_MAX_LENGTH = 50

# Reminder sweep
REMINDER_WINDOW_DAYS = 3
REMINDER_COOLDOWN_HOURS = 12
REMINDER_TITLE = "Training deadline reminder"

# Certificates are "CERT-" followed by 8 upper-case hex characters
CERTIFICATE_PREFIX = "CERT-"
CERTIFICATE_TOKEN_LENGTH = 8

class AssignmentStatusEnum(str, Enum):
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    OVERDUE = "overdue"

class MaterialKindEnum(str, Enum):
    FILE = "file"
    LINK = "link"
    VIDEO = "video"

class MaterialTypeEnum(str, Enum):
    DOCUMENT = "document"
    VIDEO = "video"
    QUIZ = "quiz"
    SIMULATION = "simulation"
    ACKNOWLEDGMENT = "acknowledgment"

class QuestionTypeEnum(str, Enum):
    MULTIPLE_CHOICE = "multiple_choice"
    SINGLE_CHOICE = "single_choice"
    TRUE_FALSE = "true_false"
    TEXT_INPUT = "text_input"

class NotificationTypeEnum(str, Enum):
    ASSIGNMENT = "assignment"
    REMINDER = "reminder"
    DEADLINE = "deadline"
    COMPLETION = "completion"
