"""Client for the SFR learning API (spaces, content, evaluations, quizzes)."""

from sfr_sdk.learning.content import LearningContentClient
from sfr_sdk.learning.evaluations import EvaluationsClient
from sfr_sdk.learning.models import (
    Achievement,
    ContentDifficulty,
    ContentProgress,
    ContentProgressItem,
    ContentType,
    EnrollmentResult,
    EvaluationDto,
    EvaluationResponse,
    EvaluationStats,
    LearningContent,
    LearningContentCreateRequest,
    LearningMode,
    LearningProgress,
    LearningSpace,
    LearningSpaceCreateRequest,
    LearningSpaceSettings,
    LearningSpaceStatus,
    LearningStats,
    NotificationSettings,
    Page,
    ProgressRecordRequest,
    ProgressType,
    QuestionResult,
    Quiz,
    QuizAnswer,
    QuizAnswerRequest,
    QuizCreateRequest,
    QuizDifficulty,
    QuizQuestion,
    QuizResult,
    QuizStats,
    QuizStatus,
    SpaceOverview,
)
from sfr_sdk.learning.quiz import QuizClient
from sfr_sdk.learning.sdk import (
    SfrLearningSDK,
    create_dev_sdk,
    create_prod_sdk,
    create_sfr_learning_sdk,
)
from sfr_sdk.learning.spaces import LearningSpacesClient

__all__ = [
    "Achievement",
    "ContentDifficulty",
    "ContentProgress",
    "ContentProgressItem",
    "ContentType",
    "EnrollmentResult",
    "EvaluationDto",
    "EvaluationResponse",
    "EvaluationStats",
    "EvaluationsClient",
    "LearningContent",
    "LearningContentClient",
    "LearningContentCreateRequest",
    "LearningMode",
    "LearningProgress",
    "LearningSpace",
    "LearningSpaceCreateRequest",
    "LearningSpaceSettings",
    "LearningSpaceStatus",
    "LearningSpacesClient",
    "LearningStats",
    "NotificationSettings",
    "Page",
    "ProgressRecordRequest",
    "ProgressType",
    "QuestionResult",
    "Quiz",
    "QuizAnswer",
    "QuizAnswerRequest",
    "QuizClient",
    "QuizCreateRequest",
    "QuizDifficulty",
    "QuizQuestion",
    "QuizResult",
    "QuizStats",
    "QuizStatus",
    "SfrLearningSDK",
    "SpaceOverview",
    "create_dev_sdk",
    "create_prod_sdk",
    "create_sfr_learning_sdk",
]
