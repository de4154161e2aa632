"""
Tests for the sample stream digesters.
"""

import io
from datetime import datetime

from bitter_irc.digesters import custom_logger, logger_digester
from bitter_irc.irc.models import Message


def _message(**overrides) -> Message:
    params = {
        "username": "foobar",
        "content": "hello",
        "command": "PRIVMSG",
        "params": ["#test"],
        "time": datetime(2024, 5, 6, 7, 8, 9),
    }
    params.update(overrides)
    return Message(**params)


class TestCustomLogger:
    def test_writes_user_messages(self):
        stream = io.StringIO()

        custom_logger(stream)(_message(), None)

        assert stream.getvalue() == "\n2024-05-06 07:08:09 foobar: hello"

    def test_skips_messages_without_user_or_content(self):
        stream = io.StringIO()
        digest = custom_logger(stream)

        digest(_message(username=""), None)
        digest(_message(content=""), None)

        assert stream.getvalue() == ""


class TestLoggerDigester:
    def test_echoes_to_stdout(self, capsys):
        logger_digester(_message(), None)

        assert capsys.readouterr().out == "\n2024-05-06 07:08:09 foobar: hello"
