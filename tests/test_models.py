"""
Tests for Message conversion to and from wire frames.
"""

from bitter_irc.irc.codec import Frame, Prefix, format_frame, parse_frame
from bitter_irc.irc.config import Config
from bitter_irc.irc.models import Message, pong_message
from tests.fixtures.irc_fixtures import PONG_LINE, PRIVMSG_LINE


class TestMessageFromFrame:
    def test_prefix_fields_are_mapped(self):
        message = Message.from_frame(parse_frame(PRIVMSG_LINE))

        assert message.name == "foobar"
        assert message.username == "foobar"
        assert message.host == "irc.example.tv"
        assert message.content == "hello"
        assert message.command == "PRIVMSG"
        assert message.params == ["#test"]
        assert message.time is not None
        assert message.is_chat is True

    def test_missing_prefix_leaves_sender_empty(self):
        message = Message.from_frame(Frame(command="NOTICE", params=["*"], trailing="hi"))

        assert (message.name, message.username, message.host) == ("", "", "")
        assert message.content == "hi"
        assert message.is_chat is False

    def test_params_are_copied(self):
        frame = Frame(command="JOIN", params=["#test"])
        message = Message.from_frame(frame)

        message.params.append("#other")

        assert frame.params == ["#test"]


class TestMessageToFrame:
    def test_no_sender_means_no_prefix(self):
        frame = Message(command="JOIN", params=["#test"]).to_frame()

        assert frame.prefix is None

    def test_only_non_empty_sender_fields_populate_prefix(self):
        frame = Message(username="foobar", command="PRIVMSG", params=["#test"], content="hi").to_frame()

        assert frame.prefix == Prefix(user="foobar")
        assert frame.trailing == "hi"

    def test_round_trip_preserves_command_params_and_content(self):
        original = Message(
            name="foobar",
            username="foobar",
            host="irc.example.tv",
            command="PRIVMSG",
            params=["#test"],
            content="hello there",
        )

        decoded = Message.from_frame(parse_frame(format_frame(original.to_frame())))

        assert decoded.command == original.command
        assert decoded.params == original.params
        assert decoded.content == original.content
        assert (decoded.name, decoded.username, decoded.host) == ("foobar", "foobar", "irc.example.tv")

    def test_round_trip_without_prefix(self):
        original = Message(command="PRIVMSG", params=["#test"], content="hello")

        decoded = Message.from_frame(parse_frame(format_frame(original.to_frame())))

        assert (decoded.name, decoded.username, decoded.host) == ("", "", "")
        assert decoded.content == "hello"

    def test_round_trip_keeps_lower_case_command(self):
        original = Message(command="privmsg", params=["#test"], content="hi")

        decoded = Message.from_frame(parse_frame(format_frame(original.to_frame())))

        assert decoded.command == "privmsg"
        assert decoded.params == ["#test"]
        assert decoded.content == "hi"


class TestPongMessage:
    def test_pong_wire_format(self):
        config = Config.twitch("test", "foobar", "abc123")

        assert format_frame(pong_message(config).to_frame()) == PONG_LINE
