"""Flask CLI commands for SpendLens."""

from __future__ import annotations

import click


def seed_default_categories(store, *, user_id: int) -> int:
    """Create any default categories the user does not have yet.

    Returns the number of categories created.
    """

    from .constants.categories import DEFAULT_EXPENSE_CATEGORIES

    existing = {category.name for category in store.query("expense_categories", user_id=user_id)}
    created = 0
    for name, icon, color in DEFAULT_EXPENSE_CATEGORIES:
        if name in existing:
            continue
        store.insert(
            "expense_categories", {"name": name, "icon": icon, "color": color}, user_id=user_id
        )
        created += 1
    return created


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("spendlens-create-user")
    @click.option("--email", prompt=True)
    @click.option("--display-name", default="", help="Name shown in the UI")
    @click.password_option()
    def spendlens_create_user(email: str, display_name: str, password: str) -> None:
        """Create a user account."""

        from .extensions import get_session_factory
        from .services import auth

        try:
            user = auth.create_user(
                email=email,
                password=password,
                display_name=display_name,
                session_factory=get_session_factory(),
            )
        except ValueError as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(f"Created user #{user.id} ({user.email})")

    @app.cli.command("spendlens-seed")
    @click.option("--email", required=True, help="Account to seed categories for")
    def spendlens_seed(email: str) -> None:
        """Seed the default expense categories for a user."""

        from .extensions import get_session_factory, get_store
        from .services import auth

        user = auth.get_user_by_email(email, get_session_factory())
        if user is None or user.id is None:
            raise click.ClickException(f"No user with email {email}")
        created = seed_default_categories(get_store(), user_id=user.id)
        click.echo(f"Seeded {created} categories for {user.email}")
