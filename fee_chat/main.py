"""Main application entry point.

Runs the chat API (FastAPI, port 5001) and the chat page (NiceGUI, port 8080)
as separate servers; the page calls the API across origins.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def run_api() -> None:
    """Run the chat API.

    The application (and its system prompt) is built before uvicorn binds
    the port; a startup failure exits without accepting connections.
    """
    import uvicorn

    from fee_chat.agent.prompt import PromptInitializationError
    from fee_chat.api.app import create_app

    try:
        app = create_app()
    except (PromptInitializationError, ValueError) as e:
        logger.critical(f"Failed to initialize chat API: {e}")
        sys.exit(1)

    port = int(os.getenv("PORT", "5001"))
    logger.info(f"Chat API available at http://localhost:{port}/api/chat")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_ui() -> None:
    """Run the NiceGUI chat page."""
    from fee_chat.ui.chat_page import run

    port = int(os.getenv("UI_PORT", "8080"))
    logger.info(f"Chat UI available at http://localhost:{port}/")
    run(port=port)


def run_separate() -> None:
    """Run the API and the UI as two processes until either exits."""
    import subprocess
    import time

    api_env = {**os.environ, "RUN_MODE": "api"}
    ui_env = {**os.environ, "RUN_MODE": "ui"}

    api_proc = subprocess.Popen([sys.executable, "-m", "fee_chat.main"], env=api_env)
    ui_proc = subprocess.Popen([sys.executable, "-m", "fee_chat.main"], env=ui_env)

    try:
        while api_proc.poll() is None and ui_proc.poll() is None:
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        for proc in (api_proc, ui_proc):
            proc.terminate()
        for proc in (api_proc, ui_proc):
            proc.wait()


def main() -> None:
    """Application entry point.

    RUN_MODE selects what to start: ``api``, ``ui`` or ``separate``
    (both, the default).
    """
    mode = os.getenv("RUN_MODE", "separate").lower()

    logger.info(f"Starting Fee chat in {mode} mode")

    if mode == "api":
        run_api()
    elif mode == "ui":
        run_ui()
    else:
        run_separate()


if __name__ in {"__main__", "__mp_main__"}:
    main()
