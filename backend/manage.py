from schoolbus import create_app
from schoolbus.seed import ensure_default_admin, initialize_device
from flask.cli import with_appcontext
from flask_migrate import upgrade, migrate, init
import click

app = create_app()

@app.cli.command("db-init")
@with_appcontext
def db_init():
    """Initializes migrations directory"""
    init()

@app.cli.command("db-migrate")
@with_appcontext
def db_migrate():
    """Creates a new migration"""
    migrate()

@app.cli.command("db-upgrade")
@with_appcontext
def db_upgrade():
    """Applies migrations"""
    upgrade()

@app.cli.command("seed-admin")
@with_appcontext
def seed_admin():
    """Creates the default admin if no admin exists"""
    if ensure_default_admin():
        click.echo(f"Default admin created: phone {app.config['DEFAULT_ADMIN_PHONE']}")
    else:
        click.echo("An admin user already exists")

@app.cli.command("init-device")
@with_appcontext
def init_device():
    """Ensures the device telemetry record exists"""
    device = initialize_device()
    click.echo(f"Device record {device.id} ready")
