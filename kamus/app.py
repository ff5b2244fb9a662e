from flask import Flask, jsonify
from flask_cors import CORS

from kamus.config import configure_logging, get_settings


def create_app(settings=None):
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = Flask(__name__)
    app.config['KAMUS_SETTINGS'] = settings
    CORS(app, resources={r"/api/*": {"origins": settings.cors_origins}})

    from .api.dictionary import dictionary_bp
    from .api.translate import translate_bp
    from .api.pinyin import pinyin_bp

    app.register_blueprint(dictionary_bp, url_prefix='/api/dictionary')
    app.register_blueprint(translate_bp, url_prefix='/api/translate')
    app.register_blueprint(pinyin_bp, url_prefix='/api/pinyin')

    @app.route('/health')
    def health():
        return jsonify({'status': 'healthy'})

    return app
