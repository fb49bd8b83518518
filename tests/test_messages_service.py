"""Tests for direct messaging."""

from truckrecruit.messages.service import (
    active_conversations,
    get_message,
    get_recipient,
    list_messages,
    mark_read,
    message_to_dict,
    send_message,
    unread_count,
)


class TestMessages:
    def test_send_strips_and_starts_unread(self, db_session, recruiter, driver):
        message = send_message(db_session, recruiter.id, driver.id, "  Are you available Monday?  ")
        db_session.commit()

        data = message_to_dict(get_message(db_session, message.id))
        assert data["content"] == "Are you available Monday?"
        assert data["read"] is False
        assert unread_count(db_session, driver.id) == 1
        assert unread_count(db_session, recruiter.id) == 0

    def test_mark_read(self, db_session, recruiter, driver):
        message = send_message(db_session, recruiter.id, driver.id, "Hello")
        mark_read(db_session, message)
        db_session.commit()
        assert unread_count(db_session, driver.id) == 0

    def test_conversation_filter(self, db_session, recruiter, make_driver):
        a, b = make_driver(name="Driver A"), make_driver(name="Driver B")
        send_message(db_session, recruiter.id, a.id, "Hi A")
        send_message(db_session, a.id, recruiter.id, "Hi back")
        send_message(db_session, recruiter.id, b.id, "Hi B")
        db_session.commit()

        assert len(list_messages(db_session, recruiter.id)) == 3
        with_a = list_messages(db_session, recruiter.id, with_user=a.id)
        assert {m.content for m in with_a} == {"Hi A", "Hi back"}
        assert len(list_messages(db_session, b.id)) == 1

    def test_active_conversations_counts_partners(self, db_session, recruiter, make_driver):
        a, b = make_driver(name="Driver A"), make_driver(name="Driver B")
        send_message(db_session, recruiter.id, a.id, "1")
        send_message(db_session, a.id, recruiter.id, "2")
        send_message(db_session, recruiter.id, b.id, "3")
        db_session.commit()

        assert active_conversations(db_session, recruiter.id) == 2
        assert active_conversations(db_session, a.id) == 1

    def test_recipient_must_be_active(self, db_session, make_driver):
        gone = make_driver(is_active=False)
        here = make_driver()
        assert get_recipient(db_session, gone.id) is None
        assert get_recipient(db_session, "garbage") is None
        assert get_recipient(db_session, str(here.id)).id == here.id
