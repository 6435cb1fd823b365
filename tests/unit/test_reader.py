import io

import pytest

from globaldefs.core.reader import read_global_defs, tokenize


CONFIG = """\
! Configuration File for keepalived

global_defs {
    router_id LVS_DEVEL   # trailing comment
    notification_email {
        acassen@firewall.loc
        failover@firewall.loc
    }
    lvs_timeouts tcp 10 udp 5
}

vrrp_instance VI_1 {
    state MASTER
    virtual_ipaddress {
        192.168.200.16
    }
}

instance node1
"""


def _read(text: str) -> list:
    return list(read_global_defs(io.StringIO(text), source="keepalived.conf"))


def test_tokenize_strips_comments_and_quotes() -> None:
    assert tokenize('notify_fifo_script "/usr/bin/my script" arg # note') == [
        "notify_fifo_script",
        "/usr/bin/my script",
        "arg",
    ]
    assert tokenize("! only a comment") == []


def test_reader_flattens_section_and_skips_other_blocks() -> None:
    lines = _read(CONFIG)

    assert [line.directive for line in lines] == ["router_id", "notification_email", "lvs_timeouts", "instance"]
    assert lines[0].tokens == ("router_id", "LVS_DEVEL")
    assert lines[0].lineno == 4
    assert lines[0].source == "keepalived.conf"
    assert lines[1].block == ("acassen@firewall.loc", "failover@firewall.loc")
    assert lines[1].lineno == 5
    assert lines[2].block is None
    assert lines[3].tokens == ("instance", "node1")


def test_reader_handles_brace_on_following_line() -> None:
    text = "global_defs\n{\n  notification_email\n  {\n    a@example.com\n  }\n  vrrp_strict\n}\n"
    lines = _read(text)

    assert [line.tokens for line in lines] == [("notification_email",), ("vrrp_strict",)]
    assert lines[0].block == ("a@example.com",)


def test_reader_inline_block() -> None:
    lines = _read("global_defs {\n notification_email { a@example.com b@example.com }\n router_id r1 }\n")

    assert lines[0].block == ("a@example.com", "b@example.com")
    assert lines[1].tokens == ("router_id", "r1")


def test_reader_reports_unbalanced_quotes() -> None:
    with pytest.raises(ValueError, match="keepalived.conf:2"):
        _read('global_defs {\n router_id "open\n}\n')


def test_reader_drops_top_level_statements_outside_root_vocabulary() -> None:
    text = (
        "include /etc/keepalived/extra.conf\n"
        "instance node1\n"
        "global_defs {\n router_id r1\n}\n"
        "vrrp_script chk_haproxy\n"
        "{\n script /usr/bin/check\n}\n"
        "net_namespace blue\n"
        "bogus_word\n"
    )
    lines = _read(text)

    assert [line.tokens for line in lines] == [
        ("instance", "node1"),
        ("router_id", "r1"),
        ("net_namespace", "blue"),
    ]


def test_reader_keeps_unknown_words_inside_section() -> None:
    lines = _read("global_defs {\n include_me\n}\ninclude other.conf\n")
    assert [line.tokens for line in lines] == [("include_me",)]
