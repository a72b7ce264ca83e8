import click
from flask.cli import with_appcontext

from marketplace import db
from marketplace.errors import MarketplaceError
from marketplace.services import auth_service


@click.command('init-db')
@with_appcontext
def init_db():
    db.create_all()
    click.echo('Database initialized.')


@click.command('create-admin')
@click.argument('name')
@click.argument('email')
@click.argument('password')
@with_appcontext
def create_admin(name, email, password):
    """Create an administrator account."""
    try:
        admin = auth_service.create_admin(name, email, password)
    except MarketplaceError as e:
        raise click.ClickException(e.message)
    click.echo(f'Admin {admin.email} created with id {admin.id}.')


def register_commands(app):
    app.cli.add_command(init_db)
    app.cli.add_command(create_admin)
