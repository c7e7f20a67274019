from storefront.data.models import Cart, User, cart_id_for
from storefront.domain.errors import ConflictError, NotFoundError
from storefront.domain.schemas import UserCreate, UserUpdate
from storefront.repos.memory_store import MemoryStore
from storefront.utils.ids import new_id, utcnow
from storefront.utils.logging import get_logger
from storefront.utils.pagination import paginate

logger = get_logger(__name__)


class UserService:
    def __init__(self, store: MemoryStore):
        self.store = store

    def list_users(self, limit: int, offset: int):
        return paginate(self.store.get_users(), limit, offset)

    def get_user(self, user_id: str) -> User:
        user = self.store.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def _require_unique_email(self, email: str, user_id: str | None = None):
        for user in self.store.get_users():
            if user.email.lower() == email.lower() and user.id != user_id:
                raise ConflictError("Email already in use", details={"email": email})

    def create_user(self, payload: UserCreate) -> User:
        """Creates the user together with its empty cart."""
        self._require_unique_email(payload.email)

        now = utcnow()
        user = User(
            id=new_id(),
            email=payload.email,
            name=payload.name,
            address=payload.address,
            created_at=now,
            updated_at=now,
        )
        created = self.store.create_user(user)

        self.store.update_cart(
            created.id,
            Cart(id=cart_id_for(created.id), user_id=created.id, items=[], created_at=now, updated_at=now),
        )

        logger.info(f"User {created.id} created with cart {cart_id_for(created.id)}")
        return created

    def update_user(self, user_id: str, payload: UserUpdate) -> User:
        existing = self.get_user(user_id)

        changes = {
            field: getattr(payload, field)
            for field in payload.model_fields_set
            if getattr(payload, field) is not None
        }
        if "email" in changes:
            self._require_unique_email(changes["email"], user_id)

        changes["updated_at"] = utcnow()
        updated = self.store.update_user(user_id, existing.model_copy(update=changes))

        logger.info(f"User {user_id} updated")
        return updated

    def delete_user(self, user_id: str) -> User:
        removed = self.store.delete_user(user_id)
        if removed is None:
            raise NotFoundError("User not found")

        # orders stay for history, the cart goes with the user
        self.store.delete_cart(user_id)

        logger.info(f"User {user_id} deleted")
        return removed
