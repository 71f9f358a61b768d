import pytest

from bookmybook.domain.exceptions import ValidationError
from bookmybook.domain.value_objects.conversation_id import ConversationId
from bookmybook.domain.value_objects.user_id import UserId


@pytest.mark.parametrize(
    "a, b",
    [("u1", "u2"), ("zed", "Adam"), ("abc", "abd"), ("x", "xy"), ("Ünïcode", "ascii")],
)
def test_id_is_order_independent(a, b):
    assert ConversationId.for_participants(a, b) == ConversationId.for_participants(b, a)


def test_id_joins_sorted_ids():
    assert ConversationId.for_participants("u2", "u1").value == "u1_u2"
    assert ConversationId.for_participants(UserId("bob"), UserId("alice")).value == "alice_bob"


def test_distinct_pairs_get_distinct_ids():
    ids = {
        ConversationId.for_participants("a", "b").value,
        ConversationId.for_participants("a", "c").value,
        ConversationId.for_participants("b", "c").value,
    }
    assert len(ids) == 3


def test_participants_round_trip():
    conversation_id = ConversationId.for_participants("u2", "u1")
    assert conversation_id.participants() == (UserId("u1"), UserId("u2"))
    assert conversation_id.other_participant(UserId("u1")) == UserId("u2")
    assert conversation_id.includes(UserId("u2"))
    assert not conversation_id.includes(UserId("u3"))


@pytest.mark.parametrize(
    "a, b",
    [("u1", "u1"), ("", "u1"), ("   ", "u1"), ("u_1", "u2"), (" u2", "u1"), ("u1", "u2\n")],
)
def test_invalid_pairs_are_rejected(a, b):
    with pytest.raises(ValidationError):
        ConversationId.for_participants(a, b)


@pytest.mark.parametrize("raw", ["", "u1", "u2_u1", "u1_u2_u3", "_u1"])
def test_non_canonical_ids_are_rejected(raw):
    with pytest.raises(ValidationError):
        ConversationId(raw)


def test_other_participant_requires_membership():
    with pytest.raises(ValidationError):
        ConversationId("u1_u2").other_participant(UserId("u3"))
