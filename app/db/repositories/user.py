from typing import Optional

from app.db.models.user import User
from app.db.repositories.base import BaseRepository


class UserRepository(BaseRepository):

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)
