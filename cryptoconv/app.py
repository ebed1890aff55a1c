# cryptoconv/app.py
from flask import Flask, jsonify, send_from_directory
from flask_cors import CORS
import os

# ---- Core Config ----
from cryptoconv.config import settings
from cryptoconv.routes.converter import converter_bp
from cryptoconv.routes.quote import quote_bp
from cryptoconv.services.conversion import ConverterController

UI_DIR = os.path.join(os.path.dirname(__file__), "ui")


def create_app(controller=None):
    app = Flask(__name__)
    CORS(app)

    # one controller per process; it owns the price cache
    app.config["CONVERTER"] = controller or ConverterController()

    @app.route("/")
    def home():
        return send_from_directory(UI_DIR, "converter.html")

    @app.route("/quote")
    def quote_page():
        return send_from_directory(UI_DIR, "quote.html")

    @app.route("/healthz")
    def healthz():
        return jsonify({"ok": True})

    # ---- Blueprints ----
    app.register_blueprint(converter_bp, url_prefix="")
    app.register_blueprint(quote_bp, url_prefix="")
    return app


app = create_app()

if __name__ == "__main__":
    app.run(host=settings.HOST, port=settings.PORT)
