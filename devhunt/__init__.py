from flask import Flask, render_template
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
import os

from config import Config

db = SQLAlchemy()
login_manager = LoginManager()


def create_app(config_class=Config, uploader=None):
    basedir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

    template_dir = os.path.join(basedir, 'templates')
    static_dir = os.path.join(basedir, 'static')

    app = Flask(__name__,
                template_folder=template_dir,
                static_folder=static_dir)

    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # Create instance/ and uploads/ if missing
    os.makedirs(os.path.join(basedir, 'instance'), exist_ok=True)
    uploads_path = app.config['UPLOAD_FOLDER']
    if not os.path.exists(uploads_path):
        os.makedirs(uploads_path)
        app.logger.info("Created uploads folder: %s", uploads_path)

    db.init_app(app)
    login_manager.init_app(app)

    login_manager.login_view = 'auth.login'
    login_manager.login_message_category = 'info'

    @login_manager.user_loader
    def load_user(user_id):
        from devhunt.models.user import User
        return db.session.get(User, int(user_id))

    if uploader is None:
        from devhunt.services.file_uploader import FileUploader
        uploader = FileUploader(app.config['UPLOAD_FOLDER'], app.config['UPLOAD_URL_BASE'])
    app.extensions['devhunt.uploader'] = uploader

    from devhunt.routes.public import public_bp
    from devhunt.routes.auth import auth_bp
    from devhunt.routes.account import account_bp

    app.register_blueprint(public_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(account_bp)

    from devhunt.utils.links import external_url
    app.add_template_filter(external_url, 'external_url')

    register_error_handlers(app)

    return app


def register_error_handlers(app):
    from devhunt.services.errors import BackendError

    @app.errorhandler(404)
    def not_found(error):
        return render_template('errors/404.html'), 404

    @app.errorhandler(BackendError)
    def backend_error(error):
        app.logger.error("Backend error: %s", error)
        return render_template('errors/backend.html', message=str(error)), 503
