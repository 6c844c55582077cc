import asyncio

from flutter_ui_designer.chat import WELCOME_TEXT, ChatSession, simulated_reply
from flutter_ui_designer.models.chat import ChatSender


def test_session_opens_with_welcome_message():
    session = ChatSession()

    messages = session.messages()

    assert len(messages) == 1
    assert messages[0].id == "welcome-message"
    assert messages[0].text == WELCOME_TEXT
    assert messages[0].sender is ChatSender.assistant


def test_reply_arrives_after_delay():
    async def scenario():
        session = ChatSession(reply_delay=0.01)
        sent = session.send("Make the button red")
        assert sent.sender is ChatSender.user
        assert len(session.messages()) == 2
        assert session.pending_replies == 1
        await asyncio.sleep(0.05)
        return session

    session = asyncio.run(scenario())

    messages = session.messages()
    assert [message.sender for message in messages] == [
        ChatSender.assistant,
        ChatSender.user,
        ChatSender.assistant,
    ]
    assert messages[-1].text == simulated_reply("Make the button red")
    assert session.pending_replies == 0


def test_simulated_reply_text():
    assert simulated_reply("hi") == 'I received your message: "hi". This is a simulated response.'


def test_close_cancels_pending_reply():
    async def scenario():
        session = ChatSession(reply_delay=0.05)
        session.send("Anyone there?")
        session.close()
        await asyncio.sleep(0.1)
        return session

    session = asyncio.run(scenario())

    assert session.closed
    assert session.pending_replies == 0
    assert [message.sender for message in session.messages()] == [ChatSender.assistant, ChatSender.user]


def test_closed_session_rejects_messages():
    session = ChatSession()
    session.close()

    assert session.send("late") is None
    assert len(session.messages()) == 1


def test_send_without_event_loop_records_user_message():
    session = ChatSession(reply_delay=0)

    message = session.send("offline")

    assert message.text == "offline"
    assert session.pending_replies == 0
    assert len(session.messages()) == 2


def test_message_ids_are_unique():
    session = ChatSession()

    ids = {session.send(f"message {index}").id for index in range(10)}

    assert len(ids) == 10
