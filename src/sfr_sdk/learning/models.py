"""Pydantic models for the learning API.

Wire names are camelCase; every model accepts both the wire name and the
Python attribute name, and keeps unknown fields so newer server payloads
survive a round trip. Request DTOs are serialised by the executor with
``by_alias=True`` and ``exclude_none=True``.
"""

from __future__ import annotations

import enum
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


# ------------------------------------------------------------------ #
# Enums
# ------------------------------------------------------------------ #


class LearningMode(str, enum.Enum):
    SCHOOL = "SCHOOL"
    SALON = "SALON"
    FANCLUB = "FANCLUB"


class LearningSpaceStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"


class LearningSpaceRole(str, enum.Enum):
    OWNER = "OWNER"
    INSTRUCTOR = "INSTRUCTOR"
    MEMBER = "MEMBER"
    GUEST = "GUEST"


class ContentType(str, enum.Enum):
    TEXT = "TEXT"
    VIDEO = "VIDEO"
    AUDIO = "AUDIO"
    DOCUMENT = "DOCUMENT"
    INTERACTIVE = "INTERACTIVE"


class ContentDifficulty(str, enum.Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"


class QuizDifficulty(str, enum.Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


class QuizStatus(str, enum.Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class ProgressType(str, enum.Enum):
    STARTED = "STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class QuestionType(str, enum.Enum):
    SINGLE_CHOICE = "SINGLE_CHOICE"
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"
    TRUE_FALSE = "TRUE_FALSE"
    TEXT_INPUT = "TEXT_INPUT"


class EnrollmentStatus(str, enum.Enum):
    JOINED = "JOINED"
    PENDING_APPROVAL = "PENDING_APPROVAL"


class ReportReason(str, enum.Enum):
    SPAM = "spam"
    INAPPROPRIATE = "inappropriate"
    HARASSMENT = "harassment"
    OTHER = "other"


# ------------------------------------------------------------------ #
# Pagination
# ------------------------------------------------------------------ #


class Page(_CamelModel, Generic[T]):
    """Spring-style page: ``{content, totalElements, totalPages, size, number}``."""

    content: list[T] = Field(default_factory=list)
    total_elements: int = 0
    total_pages: int = 0
    size: int = 0
    number: int = 0


# ------------------------------------------------------------------ #
# Learning spaces
# ------------------------------------------------------------------ #


class NotificationSettings(_CamelModel):
    new_content_notification: Optional[bool] = None
    assignment_due_notification: Optional[bool] = None
    discussion_notification: Optional[bool] = None


class LearningSpaceSettings(_CamelModel):
    allow_comments: Optional[bool] = None
    allow_file_upload: Optional[bool] = None
    moderation_required: Optional[bool] = None
    auto_progress_tracking: Optional[bool] = None
    notification_settings: Optional[NotificationSettings] = None


class LearningSpace(_CamelModel):
    """A course ("learning space"). Detail responses may carry ``members`` as an extra."""

    id: int
    name: str
    description: Optional[str] = None
    mode: Optional[LearningMode] = None
    status: Optional[LearningSpaceStatus] = None
    is_public: bool = False
    max_members: Optional[int] = None
    member_count: int = 0
    owner_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class LearningSpaceCreateRequest(_CamelModel):
    name: str
    mode: LearningMode
    description: Optional[str] = None
    is_public: Optional[bool] = None
    max_members: Optional[int] = None
    settings: Optional[LearningSpaceSettings] = None


class EnrollmentResult(_CamelModel):
    status: EnrollmentStatus
    message: Optional[str] = None
    space_id: Optional[int] = None


# ------------------------------------------------------------------ #
# Learning content and progress
# ------------------------------------------------------------------ #


class LearningContent(_CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    content_type: Optional[ContentType] = None
    content_url: Optional[str] = None
    duration: Optional[int] = None
    difficulty: Optional[ContentDifficulty] = None
    tags: list[str] = Field(default_factory=list)
    is_published: bool = False
    order: int = 0
    author_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class LearningContentCreateRequest(_CamelModel):
    """Fields for a new content item. Uploaded files are passed separately."""

    title: str
    content_type: ContentType
    difficulty: ContentDifficulty
    description: Optional[str] = None
    content: Optional[str] = None
    duration: Optional[int] = None
    tags: Optional[list[str]] = None
    is_published: Optional[bool] = None
    order: Optional[int] = None


class PrerequisiteCheck(_CamelModel):
    can_access: bool
    missing_prerequisites: list[LearningContent] = Field(default_factory=list)


class ContentProgress(_CamelModel):
    is_completed: bool = False
    completed_at: Optional[str] = None
    time_spent: int = 0
    last_accessed_at: Optional[str] = None
    rating: Optional[float] = None


class ContentProgressItem(_CamelModel):
    content_id: int
    content_title: Optional[str] = None
    progress: ContentProgress = Field(default_factory=ContentProgress)


class Achievement(_CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    badge_url: Optional[str] = None
    earned_at: Optional[str] = None


class LearningProgress(_CamelModel):
    space_id: int
    user_id: Optional[str] = None
    overall_progress: float = 0
    completed_content_count: int = 0
    total_content_count: int = 0
    total_time_spent: int = 0
    last_activity: Optional[str] = None
    content_progress: list[ContentProgressItem] = Field(default_factory=list)
    achievements: list[Achievement] = Field(default_factory=list)


class ProgressRecordRequest(_CamelModel):
    progress_type: ProgressType
    time_spent: Optional[int] = None
    rating: Optional[float] = None
    notes: Optional[str] = None


# ------------------------------------------------------------------ #
# Quizzes
# ------------------------------------------------------------------ #


class QuizQuestion(_CamelModel):
    question: str
    question_type: QuestionType
    options: list[str] = Field(default_factory=list)
    correct_answer: str
    explanation: Optional[str] = None
    points: Optional[int] = None


class Quiz(_CamelModel):
    """A quiz summary. The detail endpoint adds ``questions`` as an extra."""

    id: int
    title: str
    description: Optional[str] = None
    difficulty: Optional[QuizDifficulty] = None
    time_limit: Optional[int] = None
    passing_score: Optional[float] = None
    question_count: int = 0
    author_id: Optional[str] = None
    created_at: Optional[str] = None
    user_attempts: int = 0
    best_score: Optional[float] = None


class QuizList(_CamelModel):
    quizzes: list[Quiz] = Field(default_factory=list)
    total_count: int = 0


class QuizCreateRequest(_CamelModel):
    title: str
    difficulty: QuizDifficulty
    questions: list[QuizQuestion]
    description: Optional[str] = None
    time_limit: Optional[int] = None
    passing_score: Optional[float] = None


class QuizAnswer(_CamelModel):
    question_index: int
    answer: str


class QuizAnswerRequest(_CamelModel):
    answers: list[QuizAnswer]


class QuestionResult(_CamelModel):
    question_index: int
    is_correct: bool
    user_answer: Optional[str] = None
    correct_answer: Optional[str] = None
    explanation: Optional[str] = None


class QuizResult(_CamelModel):
    quiz_id: int
    score: float
    total_questions: int = 0
    correct_answers: int = 0
    passed: bool = False
    time_spent: int = 0
    submitted_at: Optional[str] = None
    question_results: list[QuestionResult] = Field(default_factory=list)


class QuizBestScore(_CamelModel):
    quiz_id: int
    quiz_title: Optional[str] = None
    score: float = 0
    attempted_at: Optional[str] = None


class QuizStats(_CamelModel):
    total_quizzes: int = 0
    completed_quizzes: int = 0
    average_score: float = 0
    total_time_spent: int = 0
    best_scores: list[QuizBestScore] = Field(default_factory=list)


# ------------------------------------------------------------------ #
# Evaluations
# ------------------------------------------------------------------ #


class EvaluationDto(_CamelModel):
    content_id: int
    rating: float
    comment: Optional[str] = None
    character_id: Optional[str] = None


class EvaluationResponse(_CamelModel):
    id: int
    content_id: int
    rating: float
    comment: Optional[str] = None
    character_id: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[str] = None


class EvaluationStats(_CamelModel):
    average_rating: float = 0
    total_evaluations: int = 0
    rating_distribution: dict[str, int] = Field(default_factory=dict)


class RatedContent(_CamelModel):
    content_id: int
    content_title: Optional[str] = None
    average_rating: float = 0
    total_evaluations: int = 0


# ------------------------------------------------------------------ #
# Facade aggregates
# ------------------------------------------------------------------ #


class LearningStats(_CamelModel):
    progress: LearningProgress
    quiz_stats: QuizStats
    completion_rate: float
    total_time_spent: int
    achievements: list[Achievement] = Field(default_factory=list)


class SpaceStats(_CamelModel):
    content_count: int
    quiz_count: int
    completion_rate: float


class SpaceOverview(_CamelModel):
    space: LearningSpace
    content: list[LearningContent]
    progress: LearningProgress
    quizzes: list[Quiz]
    stats: SpaceStats


def dump_request(request: Any) -> dict[str, Any]:
    """Return the wire form of a request DTO or a plain mapping of fields."""
    if isinstance(request, BaseModel):
        return request.model_dump(mode="json", by_alias=True, exclude_none=True)
    return {k: v for k, v in dict(request).items() if v is not None}
