from flask import Flask
from flask_cors import CORS
from dotenv import load_dotenv
import os

from routes.bible_api import bible_bp

load_dotenv()

app = Flask(__name__)

app.config["SECRET_KEY"] = os.getenv("SECRET_KEY", "change-me")
app.json.ensure_ascii = False  # keep superscript digits readable

CORS(app)

# Register blueprints
app.register_blueprint(bible_bp)

if __name__ == "__main__":
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "5055")))
