"""Pydantic schemas, re-exported for convenience."""

from quizserver.schemas.common import ErrorResponse, SuccessResponse  # noqa: F401
from quizserver.schemas.user import (  # noqa: F401
    AuthResponse,
    Role,
    UserCreate,
    UserLogin,
    UserRead,
)
from quizserver.schemas.quiz import (  # noqa: F401
    QuestionRead,
    QuestionType,
    QuizCreate,
    QuizMeta,
    QuizQuestionsRead,
    QuizRead,
    QuizUpdate,
    StudentQuestionRead,
)
from quizserver.schemas.attempt import (  # noqa: F401
    AnswerIn,
    AnswerValue,
    AttemptAnswerRead,
    AttemptDetailRead,
    AttemptRead,
    AttemptSubmit,
    SubmissionRead,
)
from quizserver.schemas.progress import ProgressEntry  # noqa: F401
from quizserver.schemas.admin import (  # noqa: F401
    QuizAttemptRow,
    StudentRef,
    StudentScoreRow,
)
