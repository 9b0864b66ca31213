"""API route package; imports all routers for main.py."""

from quizserver.api.health import router as health_router  # noqa: F401
from quizserver.api.users import router as users_router  # noqa: F401
from quizserver.api.student import router as student_router  # noqa: F401
from quizserver.api.admin import router as admin_router  # noqa: F401
