"""Tests for the Telegram webhook app."""
from dataclasses import replace
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from conftest import KNOWN_ID, OMELETTE_RECIPE, FakeSender, meal_payload
from mealbot import menu_client
from mealbot.bot import messages
from mealbot import config
from mealbot.main import create_app
from mealbot.telegram import TelegramClient


@pytest.fixture
def bot(settings):
    sender = FakeSender()

    def run(bot_settings=settings):
        return TestClient(create_app(bot_settings, sender))

    return SimpleNamespace(run=run, sender=sender)


def get_meal_update(user_id=KNOWN_ID):
    return {
        "update_id": 10,
        "callback_query": {"id": "q1", "data": "get_meal", "from": {"id": user_id}, "message": {"chat": {"id": user_id}}},
    }


def test_lifespan_broadcasts_start_and_stop(bot):
    with bot.run() as client:
        assert client.get("/").json() == {"status": "ok", "known_users": 1}
        assert [m["text"] for m in bot.sender.sent] == [messages.BOT_STARTED.format(name="Ivan")]

    assert bot.sender.sent[-1]["text"] == messages.BOT_STOPPED.format(name="Ivan")


def test_start_command(bot):
    with bot.run() as client:
        response = client.post("/", json={"update_id": 1, "message": {"text": "/start", "chat": {"id": 42}, "from": {"id": KNOWN_ID}}})

    assert response.json() == {"status": "ok"}
    welcome = bot.sender.sent[1]
    assert welcome["chat_id"] == 42
    assert welcome["text"] == messages.WELCOME_BACK.format(name="Ivan")


def test_get_meal_button(bot, monkeypatch):
    payload = meal_payload(["Omelette"], [OMELETTE_RECIPE])
    monkeypatch.setattr(
        menu_client.requests,
        "get",
        lambda url, params=None, timeout=None: SimpleNamespace(status_code=200, content=payload, text=payload.decode()),
    )

    with bot.run() as client:
        response = client.post("/", json=get_meal_update())

    assert response.status_code == 200
    assert bot.sender.answered == ["q1"]
    meal = bot.sender.sent[2]
    assert meal["parse_mode"] == "Markdown"
    assert "- Beat eggs" in meal["text"]


def test_handler_errors_are_logged_not_returned(bot, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(menu_client.requests, "get", boom)

    with bot.run() as client:
        response = client.post("/", json=get_meal_update())

    assert response.json() == {"status": "ok"}


def test_ignored_update(bot):
    with bot.run() as client:
        response = client.post("/", json={"update_id": 3, "edited_message": {}})

    assert response.json() == {"status": "ok"}
    assert len(bot.sender.sent) == 2


def test_invalid_body(bot):
    with bot.run() as client:
        response = client.post("/", content=b"{oops", headers={"Content-Type": "application/json"})

    assert response.status_code == 400


def test_secret_token_is_checked(bot, settings):
    with bot.run(replace(settings, webhook_secret="s3cret")) as client:
        denied = client.post("/", json=get_meal_update())
        allowed = client.post(
            "/",
            json={"update_id": 4, "edited_message": {}},
            headers={"X-Telegram-Bot-Api-Secret-Token": "s3cret"},
        )

    assert denied.status_code == 403
    assert allowed.status_code == 200


def test_apps_keep_their_own_settings(settings):
    first, second = FakeSender(), FakeSender()
    other = replace(settings, known_users={"222222222": "Olga"})

    with TestClient(create_app(settings, first)) as a, TestClient(create_app(other, second)) as b:
        assert a.get("/").json()["known_users"] == 1
        assert b.get("/").json()["known_users"] == 1

    assert first.sent[0]["text"] == messages.BOT_STARTED.format(name="Ivan")
    assert second.sent[0]["text"] == messages.BOT_STARTED.format(name="Olga")


def test_defaults_come_from_environment(monkeypatch):
    monkeypatch.setattr(config, "TELEGRAM_TOKEN", "123:env")
    monkeypatch.setattr(config, "KNOWN_USERS", "")
    monkeypatch.setattr(config, "WEBHOOK_SECRET", "")
    monkeypatch.setattr(config, "REQUEST_TIMEOUT", "10")

    app = create_app()
    with TestClient(app) as client:
        assert client.get("/").json() == {"status": "ok", "known_users": 0}
        assert app.state.settings.telegram_token == "123:env"
        assert isinstance(app.state.sender, TelegramClient)
