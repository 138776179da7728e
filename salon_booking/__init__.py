# Import important modules and create app package
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate
from dotenv import load_dotenv
import logging
import os

# Load environment variables
load_dotenv()

# Initialize extensions
db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()


def create_app(config=None):
    # Initialize app
    app = Flask(__name__)

    # Configure app
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'dev-key')
    app.config['SQLALCHEMY_DATABASE_URI'] = os.environ.get('DATABASE_URL', 'sqlite:///salon_booking.db')
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['BOOKING_HORIZON_DAYS'] = int(os.environ.get('BOOKING_HORIZON_DAYS', 14))
    app.config['CALENDAR_CACHE_TTL'] = int(os.environ.get('CALENDAR_CACHE_TTL', 300))
    app.config['LOG_LEVEL'] = os.environ.get('LOG_LEVEL', 'INFO')
    app.config['SCHEDULING_CLOCK'] = None
    if config:
        app.config.update(config)

    app.logger.setLevel(app.config['LOG_LEVEL'])
    logging.getLogger('salon_booking').setLevel(app.config['LOG_LEVEL'])

    # Initialize extensions with app
    db.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)

    # Register blueprints
    from salon_booking.auth.routes import auth_bp
    from salon_booking.client.routes import client_bp
    from salon_booking.professional.routes import professional_bp
    from salon_booking.admin.routes import admin_bp
    from salon_booking.main.routes import main_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(client_bp)
    app.register_blueprint(professional_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(main_bp)

    from salon_booking.wiring import init_scheduling
    init_scheduling(app)

    from salon_booking.cli import register_commands
    register_commands(app)

    # Create database tables
    with app.app_context():
        from salon_booking import models  # noqa: F401
        db.create_all()
        app.logger.info("Database tables ready at %s", app.config['SQLALCHEMY_DATABASE_URI'])

    return app
