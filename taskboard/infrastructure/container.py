# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from taskboard.application.services.password_hashing import WerkzeugPasswordHasher
from taskboard.application.services.session_validator import SessionValidator
from taskboard.application.use_cases.admin.list_users import ListUsersUseCase
from taskboard.application.use_cases.admin.set_user_active import SetUserActiveUseCase
from taskboard.application.use_cases.tasks import (
    ChangeTaskStatusUseCase,
    CreateTaskUseCase,
    DeleteTaskUseCase,
    GetTaskUseCase,
    ListTasksUseCase,
    TaskStatsUseCase,
    UpdateTaskUseCase,
)
from taskboard.application.use_cases.users.login_user import LoginUserUseCase
from taskboard.application.use_cases.users.logout_user import LogoutUserUseCase
from taskboard.application.use_cases.users.profile import (
    ChangePasswordUseCase,
    GetProfileUseCase,
    UpdateProfileUseCase,
)
from taskboard.application.use_cases.users.register_user import RegisterUserUseCase
from taskboard.infrastructure.db import SessionLocal
from taskboard.infrastructure.repositories.tasks.sqlalchemy_task_repository import (
    SqlAlchemyTaskRepository,
)
from taskboard.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from taskboard.infrastructure.tokens import FernetTokenService, token_service_from_config
from taskboard.interfaces.http.controllers.admin_controller import AdminController
from taskboard.interfaces.http.controllers.auth_controller import AuthController
from taskboard.interfaces.http.controllers.misc_controller import MiscController
from taskboard.interfaces.http.controllers.tasks_controller import TasksController
from taskboard.interfaces.http.controllers.users_controller import UsersController
from taskboard.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or load_config()

    @property
    def config(self) -> AppConfig:
        return self._config

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_service(self) -> FernetTokenService:
        return token_service_from_config(self._config)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(SessionLocal)

    @cached_property
    def task_repository(self) -> SqlAlchemyTaskRepository:
        return SqlAlchemyTaskRepository(
            SessionLocal, hide_deleted=self._config.tasks.hide_deleted
        )

    @cached_property
    def session_validator(self) -> SessionValidator:
        return SessionValidator(users=self.user_repository, tokens=self.token_service)

    # Account

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase()

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
        )

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            get_profile_use_case=GetProfileUseCase(users=self.user_repository),
            update_profile_use_case=UpdateProfileUseCase(users=self.user_repository),
            change_password_use_case=ChangePasswordUseCase(
                users=self.user_repository, password_hasher=self.password_hasher
            ),
        )

    # Tasks

    @cached_property
    def tasks_controller(self) -> TasksController:
        tasks = self.task_repository
        return TasksController(
            list_use_case=ListTasksUseCase(
                tasks=tasks, max_page_size=self._config.tasks.max_page_size
            ),
            get_use_case=GetTaskUseCase(tasks=tasks),
            create_use_case=CreateTaskUseCase(tasks=tasks),
            update_use_case=UpdateTaskUseCase(tasks=tasks),
            status_use_case=ChangeTaskStatusUseCase(tasks=tasks),
            delete_use_case=DeleteTaskUseCase(tasks=tasks),
            stats_use_case=TaskStatsUseCase(tasks=tasks),
            default_page_size=self._config.tasks.default_page_size,
        )

    # Admin

    @cached_property
    def admin_controller(self) -> AdminController:
        return AdminController(
            list_users_use_case=ListUsersUseCase(users=self.user_repository),
            set_user_active_use_case=SetUserActiveUseCase(users=self.user_repository),
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController()


container = Container()
