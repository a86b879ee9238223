from flask import Flask, jsonify, redirect, url_for
from config import Config
from extensions import pending_records
from utils.date_helpers import format_short_date, format_schedule_date, format_weekday
import logging
import os


def create_app(config_class=Config):
    """Application factory pattern"""
    app = Flask(__name__)
    app.config.from_object(config_class)
    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Initialize extensions
    pending_records.init_app(app)

    @app.template_filter("date_format")
    def format_date(value):
        """Formats dates as dd-mm-yy; 'No date' for None, 'Invalid date' for junk."""
        return format_short_date(value)

    @app.template_filter("schedule_date")
    def schedule_date(value):
        return format_schedule_date(value)

    @app.template_filter("weekday")
    def weekday(value):
        return format_weekday(value)

    @app.template_filter("dash")
    def dash(value):
        """Render blank values as '-'."""
        if value is None or str(value).strip() == "":
            return "-"
        return value

    # Import and register blueprints
    from routes.pending_works import pending_works_bp
    from routes.schedule import schedule_bp

    app.register_blueprint(pending_works_bp)
    app.register_blueprint(schedule_bp)

    @app.route("/")
    def index():
        return redirect(url_for("pending_works.list_pending_works"))

    @app.route("/health")
    def health_check():
        """Health check endpoint"""
        return jsonify(
            {
                "status": "healthy",
                "environment": os.environ.get("FLASK_ENV", "production"),
            }
        )

    return app


# Create app instance (skip during test collection)
if os.environ.get("TESTING") != "True":
    app = create_app()
else:
    app = None

if __name__ == "__main__":
    # Local development server
    if app is not None:
        app.run(
            debug=os.environ.get("FLASK_DEBUG", "False").lower() == "true",
            host="0.0.0.0",
            port=int(os.environ.get("PORT", 5000)),
        )
