from .models import MessageOut, UserCreate, UserOut
from .service import UserService

__all__ = ["MessageOut", "UserCreate", "UserOut", "UserService"]
