"""Insert user use case."""

import logging
from dataclasses import dataclass
from uuid import UUID, uuid4

from taskforge.application.cancellation import CancellationToken
from taskforge.application.pipeline import RequestContext, SkipSanitization
from taskforge.application.ports import PasswordHasher, UnitOfWorkFactory
from taskforge.application.validation import Validator, password_complexity
from taskforge.domain.entities import User, UserRole

logger = logging.getLogger(__name__)


@dataclass
class InsertUserCommand:
    name: str
    email: str
    password: str


INSERT_USER_EXEMPTIONS = (
    SkipSanitization("password", "Passwords are hashed exactly as entered"),
)


class InsertUserValidator(Validator[InsertUserCommand]):
    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        super().__init__()
        self._uow_factory = unit_of_work_factory
        self.rule_for("name").not_empty("Name is required").max_length(100)
        (
            self.rule_for("email")
            .not_empty("Email is required")
            .email("A valid email address is required")
            .max_length(255)
            .must_async(self._email_available, "Email is already registered")
        )
        password_complexity(self.rule_for("password"))

    async def _email_available(self, email: str | None, token: CancellationToken) -> bool:
        if not email:
            return True
        async with self._uow_factory() as uow:
            token.raise_if_cancelled()
            return not await uow.users.get_where(email=email)


class InsertUserUseCase:
    """Register a user and give them the default role when it exists."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        password_hasher: PasswordHasher,
        default_role_name: str = "Employee",
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._hasher = password_hasher
        self._default_role_name = default_role_name

    async def execute(self, command: InsertUserCommand, context: RequestContext) -> UUID:
        user = User(
            id=uuid4(),
            name=command.name,
            email=command.email,
            password_hash=self._hasher.hash(command.password),
        )
        async with self._uow_factory() as uow:
            context.token.raise_if_cancelled()
            await uow.users.insert(user)

            roles = await uow.roles.get_where(name=self._default_role_name)
            if roles:
                await uow.user_roles.insert(UserRole(id=uuid4(), user_id=user.id, role_id=roles[0].id))
            else:
                logger.warning("Default role %s does not exist", self._default_role_name)

            context.token.raise_if_cancelled()
            await uow.save_changes()

        logger.info("Created user %s", user.id)
        return user.id
