from types import SimpleNamespace

import config
from ai_module.summary import ChapterAI, build_prompt
from models.member import Member


class StubCompletions:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.reply)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _client(completions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def _members():
    return [
        Member(id="1", first_name="Jane", last_name="Doe", road_name="Ghost",
               membership_no="7", join_date="2024-01-01T00:00:00"),
        Member(id="2", first_name="Max", last_name="Power", join_date="2024-01-01T00:00:00"),
    ]


def test_prompt_lists_members():
    prompt = build_prompt(_members())
    assert 'Jane "Ghost" Doe (Member #7)' in prompt
    assert "Max" in prompt and "Power" in prompt
    assert "3-4 sentences" in prompt


def test_empty_roster_skips_the_service():
    completions = StubCompletions(reply="unused")
    ai = ChapterAI(client=_client(completions))

    assert ai.generate_chapter_summary([]) == config.AI_EMPTY_TEXT
    assert completions.calls == []


def test_summary_returns_model_text():
    completions = StubCompletions(reply="  Two riders strong!  ")
    ai = ChapterAI(client=_client(completions), model="test-model")

    assert ai.generate_chapter_summary(_members()) == "Two riders strong!"
    assert completions.calls[0]["model"] == "test-model"
    assert completions.calls[0]["messages"][0]["role"] == "user"


def test_service_failure_returns_fallback():
    ai = ChapterAI(client=_client(StubCompletions(error=RuntimeError("timeout"))))
    assert ai.generate_chapter_summary(_members()) == config.AI_FALLBACK_TEXT


def test_empty_reply_returns_fallback():
    ai = ChapterAI(client=_client(StubCompletions(reply="")))
    assert ai.generate_chapter_summary(_members()) == config.AI_FALLBACK_TEXT


def test_missing_api_key_returns_fallback(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    assert ChapterAI().generate_chapter_summary(_members()) == config.AI_FALLBACK_TEXT
