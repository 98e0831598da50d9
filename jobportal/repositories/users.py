# jobportal/repositories/users.py
from typing import Optional

from jobportal.models.user import User, UserCreate, UserUpdate
from jobportal.repositories.base import Repository

USERS_COLLECTION = "users"


class UserRepository(Repository[User]):
    collection_name = USERS_COLLECTION
    model = User
    create_model = UserCreate
    update_model = UserUpdate

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self.find_one({"email": email})
