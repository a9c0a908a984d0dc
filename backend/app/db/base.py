from backend.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all in tests
from backend.app.models.user import User  # noqa: F401
from backend.app.models.collaborator_link import CollaboratorLink  # noqa: F401
from backend.app.models.audit_log import AuditLog  # noqa: F401
from backend.app.models.college import College  # noqa: F401
from backend.app.models.task import Task  # noqa: F401
from backend.app.models.essay import Essay  # noqa: F401
from backend.app.models.document import ApplicationDocument  # noqa: F401
from backend.app.models.essay_feedback import EssayFeedback  # noqa: F401
from backend.app.models.workspace import Workspace  # noqa: F401
