"""
Shared module for common utilities used by the REST API and the CLI.

STRUCTURE:
- shared.security: Authentication, authorization, route guarding
  - auth.py: JWT signing/verification, current_user_context, require_roles
  - password.py: Bcrypt hashing
  - rate_limit.py: Login rate limiting (slowapi)
  - routing.py: Role-scoped view routing

- shared.infrastructure: Storage plumbing
  - db.py: SQLAlchemy engine/session factory, safe_commit()
  - session_store.py: Local key-value snapshot store
  - correlation.py: Request correlation IDs

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: Roles, OrderStatus, pickup slots, enums

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - schemas.py: Shared Pydantic schemas (domain records + API payloads)

IMPORT EXAMPLES:
    from shared.security.auth import verify_jwt, current_user_context
    from shared.infrastructure.db import get_session_factory, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import Roles, OrderStatus
    from shared.utils.exceptions import NotFoundError, ForbiddenError
"""
