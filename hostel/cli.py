import click
from flask import current_app

from hostel.extensions import db
from hostel.models import User
from hostel.services.auth_service import AuthService
from hostel.services.booking_service import BookingService
from hostel.workflow import stats

DEMO_USERS = [
    {'name': 'Student User', 'email': 'student@bits.ac.in', 'role': 'student', 'department': 'Computer Science'},
    {'name': 'Reception Staff', 'email': 'reception@bits.ac.in', 'role': 'reception', 'department': None},
    {'name': 'Admin User', 'email': 'admin@bits.ac.in', 'role': 'admin', 'department': None},
]


def register_commands(app):

    @app.cli.command('seed')
    @click.option('--password', default='password', show_default=True, help='Password for the demo accounts.')
    def seed(password):
        """Create the tables and the demo student, reception and admin accounts."""
        db.create_all()
        for data in DEMO_USERS:
            if User.query.filter_by(email=data['email']).first():
                click.echo(f"{data['email']} already exists.")
                continue
            AuthService.sign_up(password=password, **data)
            click.echo(f"{data['role'].capitalize()} created ({data['email']}/{password})")
        click.echo("Database seeded successfully.")

    @app.cli.command('requests')
    def requests_summary():
        """Print booking request counts by status."""
        requests = BookingService.from_app().list_all()
        summary = stats.summarize(requests, current_app.config['TOTAL_ROOM_CAPACITY'])
        click.echo(f"Total requests: {summary['total']}")
        for status, count in summary['by_status'].items():
            click.echo(f"  {status:<20} {count}")
        click.echo(f"Room utilization: {summary['room_utilization']:.0%}")
