from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Header, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from mealbot.bot.handler import broadcast_started, broadcast_stopped, event_from_update, handle_event
from mealbot.config import Settings, load_settings
from mealbot.logger import get_logger
from mealbot.telegram import TelegramClient

logger = get_logger("mealbot.main")


def create_app(settings: Optional[Settings] = None, sender=None) -> FastAPI:
    """Build the webhook app.

    Settings are loaded from the environment at startup unless given; the
    sender defaults to a `TelegramClient` for those settings.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Greet known users on startup and say goodbye on shutdown."""
        app.state.settings = settings or load_settings()
        app.state.sender = sender or TelegramClient(app.state.settings)

        await run_in_threadpool(broadcast_started, app.state.settings, app.state.sender)
        logger.info("Bot started with %d known user(s)", len(app.state.settings.known_users))
        yield
        await run_in_threadpool(broadcast_stopped, app.state.settings, app.state.sender)
        logger.info("Bot stopped")

    app = FastAPI(title="Meal Bot", lifespan=lifespan)

    @app.get("/")
    async def health(request: Request):
        return {"status": "ok", "known_users": len(request.app.state.settings.known_users)}

    @app.post("/")
    async def webhook(
        request: Request,
        x_telegram_bot_api_secret_token: Optional[str] = Header(default=None),
    ):
        bot_settings = request.app.state.settings
        if bot_settings.webhook_secret and x_telegram_bot_api_secret_token != bot_settings.webhook_secret:
            return JSONResponse({"error": "Invalid token"}, status_code=403)

        try:
            data = await request.json()
        except ValueError:
            return JSONResponse({"error": "Invalid update"}, status_code=400)

        try:
            event = event_from_update(data)
            if event is not None:
                bot_sender = request.app.state.sender
                if event.callback_id:
                    await run_in_threadpool(bot_sender.answer_callback, event.callback_id)
                await run_in_threadpool(handle_event, event, bot_settings, bot_sender)
        except Exception:
            logger.exception("Failed to handle update: %s", data)

        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("mealbot.main:app", host="0.0.0.0", port=8000)
