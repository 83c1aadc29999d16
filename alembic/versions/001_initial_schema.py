"""Initial schema - users, roles, permissions, teams, projects, tasks.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

SYSTEM_ROLES = ("Admin", "Manager", "Developer", "Employee")

RESOURCE_OPERATIONS = {
    "Team": ("Read", "Create", "Update", "Delete", "ManageMembers"),
    "Project": ("Read", "Create", "Update", "Delete", "ManageTasks"),
    "Task": ("Read", "Create", "Update", "Delete", "Assign", "UpdateStatus", "AddComment"),
}


def upgrade() -> None:
    op.create_table(
        "app_user",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("failed_login_attempts", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("locked_until", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_app_user_email", "app_user", ["email"], unique=True)

    op.create_table(
        "role",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("parent_role_id", sa.UUID(), sa.ForeignKey("role.id", ondelete="SET NULL"), nullable=True),
    )
    op.create_index("ix_role_name", "role", ["name"], unique=True)

    op.create_table(
        "permission",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
    )
    op.create_index("ix_permission_name", "permission", ["name"], unique=True)

    op.create_table(
        "user_role",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("user_id", sa.UUID(), sa.ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False),
        sa.Column("role_id", sa.UUID(), sa.ForeignKey("role.id", ondelete="CASCADE"), nullable=False),
        sa.UniqueConstraint("user_id", "role_id", name="uq_user_role"),
    )

    op.create_table(
        "role_permission",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("role_id", sa.UUID(), sa.ForeignKey("role.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "permission_id", sa.UUID(), sa.ForeignKey("permission.id", ondelete="CASCADE"), nullable=False
        ),
        sa.UniqueConstraint("role_id", "permission_id", name="uq_role_permission"),
    )

    op.create_table(
        "team",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
    )

    op.create_table(
        "team_member",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("team_id", sa.UUID(), sa.ForeignKey("team.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.UUID(), sa.ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False),
        sa.Column("team_role", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("team_id", "user_id", name="uq_team_member"),
    )

    op.create_table(
        "project",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("team_id", sa.UUID(), sa.ForeignKey("team.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
    )

    op.create_table(
        "task",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("project_id", sa.UUID(), sa.ForeignKey("project.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("assigned_to_id", sa.UUID(), sa.ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True),
    )
    op.create_index("ix_task_project_id", "task", ["project_id"])

    roles = ", ".join(f"(gen_random_uuid(), '{name}')" for name in SYSTEM_ROLES)
    op.execute(f"INSERT INTO role (id, name) VALUES {roles}")

    permissions = ", ".join(
        f"(gen_random_uuid(), '{resource}{operation}')"
        for resource, operations in RESOURCE_OPERATIONS.items()
        for operation in operations
    )
    op.execute(f"INSERT INTO permission (id, name) VALUES {permissions}")
    op.execute("""
        INSERT INTO role_permission (id, role_id, permission_id)
        SELECT gen_random_uuid(), r.id, p.id
        FROM role r CROSS JOIN permission p
        WHERE r.name = 'Admin'
    """)


def downgrade() -> None:
    op.drop_table("task")
    op.drop_table("project")
    op.drop_table("team_member")
    op.drop_table("team")
    op.drop_table("role_permission")
    op.drop_table("user_role")
    op.drop_table("permission")
    op.drop_table("role")
    op.drop_table("app_user")
