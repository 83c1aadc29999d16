"""Update user use case."""

from dataclasses import dataclass
from uuid import UUID

from taskforge.application.cancellation import CancellationToken
from taskforge.application.pipeline import RequestContext, SkipSanitization
from taskforge.application.ports import PasswordHasher, UnitOfWorkFactory
from taskforge.application.validation import Validator, password_complexity
from taskforge.domain.exceptions import NotFound


@dataclass
class UpdateUserCommand:
    id: UUID
    name: str
    email: str
    password: str | None = None


UPDATE_USER_EXEMPTIONS = (
    SkipSanitization("password", "Passwords are hashed exactly as entered"),
)


class UpdateUserValidator(Validator[UpdateUserCommand]):
    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        super().__init__()
        self._uow_factory = unit_of_work_factory
        self.rule_for("id").not_null("User id is required")
        self.rule_for("name").not_empty("Name is required").max_length(100)
        (
            self.rule_for("email")
            .not_empty("Email is required")
            .email("A valid email address is required")
            .max_length(255)
            .must_async_with_request(self._email_available, "Email is already registered")
        )
        password_complexity(self.rule_for("password"), required=False)

    async def _email_available(
        self, email: str | None, command: UpdateUserCommand, token: CancellationToken
    ) -> bool:
        if not email:
            return True
        async with self._uow_factory() as uow:
            token.raise_if_cancelled()
            users = await uow.users.get_where(email=email)
        return all(user.id == command.id for user in users)


class UpdateUserUseCase:
    def __init__(
        self, unit_of_work_factory: UnitOfWorkFactory, password_hasher: PasswordHasher
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._hasher = password_hasher

    async def execute(self, command: UpdateUserCommand, context: RequestContext) -> None:
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(command.id)
            if user is None:
                raise NotFound("User", command.id)

            user.name = command.name
            user.email = command.email
            if command.password:
                user.password_hash = self._hasher.hash(command.password)

            context.token.raise_if_cancelled()
            await uow.users.update(user)
            await uow.save_changes()
