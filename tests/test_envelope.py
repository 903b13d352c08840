import pytest

from core.envelope import CardUI, ResultEnvelope, card_envelope
from core.errors import IncompleteEnvelope


@pytest.mark.parametrize("text", ["", "   ", None])
def test_text_is_required(text):
    with pytest.raises(IncompleteEnvelope):
        ResultEnvelope(text=text)


def test_data_is_not_validated_by_the_envelope():
    envelope = ResultEnvelope(text="ok", data=["anything", 1])
    assert envelope.data == ["anything", 1]
    assert envelope.ui is None


def test_card_description():
    card = CardUI(title="Task Added", content="- Task: x")
    assert card.to_dict() == {
        "type": "card",
        "renderMode": "page",
        "title": "Task Added",
        "content": "- Task: x",
    }


def test_card_envelope():
    envelope = card_envelope("Done", {"id": 1}, "Title", "Body", render_mode="inline")
    assert envelope.to_dict() == {
        "text": "Done",
        "data": {"id": 1},
        "ui": {"type": "card", "renderMode": "inline", "title": "Title", "content": "Body"},
    }
