"""Configuration for the Tweet Thread Generator."""
import os
import logging
from dotenv import load_dotenv
from langchain_groq import ChatGroq

# Load environment variables
load_dotenv()

# API Keys
GROQ_API_KEY = os.getenv("GROQ_API_KEY")
GROQ_MODEL_ID = os.getenv("GROQ_MODEL_ID", "llama-3.3-70b-versatile")
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.7"))

# Thread generation
MAX_TWEET_CHARS = 280
DEFAULT_FOLLOW_UP_COUNT = 3

# Publishing (seconds)
PUBLISH_MAX_ATTEMPTS = int(os.getenv("PUBLISH_MAX_ATTEMPTS", "3"))
PUBLISH_RETRY_DELAY = float(os.getenv("PUBLISH_RETRY_DELAY", "2.0"))
POST_DELAY = float(os.getenv("POST_DELAY", "1.0"))
TWITTER_DRIVER = os.getenv("TWITTER_DRIVER", "mock")  # mock or playwright

# Logging
LOG_FILE = os.getenv("LOG_FILE", "thread_tool.log")

# API URL used by the Streamlit front-end
API_URL = os.getenv("API_URL", "http://localhost:8000")


def create_llm() -> ChatGroq:
    """Create the chat model. Called once per process by the app lifespan."""
    return ChatGroq(model=GROQ_MODEL_ID, api_key=GROQ_API_KEY, temperature=LLM_TEMPERATURE)


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.FileHandler(LOG_FILE), logging.StreamHandler()]
    )
