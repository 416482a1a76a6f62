import json

from lox_lsp.repl_server import ReplServer, ReplSession, handle_request


def request(session, **payload):
    return handle_request(session, json.dumps(payload).encode("utf-8"))


def test_eval_returns_printed_output():
    session = ReplSession()
    assert request(session, cmd="eval", code="print 1 + 2;") == {"ok": True, "output": ["3"], "errors": []}


def test_definitions_persist_within_a_session():
    session = ReplSession()
    request(session, cmd="eval", code="var a = 40;")
    assert request(session, cmd="eval", code="print a + 2;")["output"] == ["42"]


def test_sessions_are_isolated():
    first, second = ReplSession(), ReplSession()
    request(first, cmd="eval", code="var only_here = 1;")
    resp = request(second, cmd="eval", code="print only_here;")
    assert resp["ok"] is False
    assert resp["errors"] == ["Undefined variable 'only_here'.\n[line 1]"]


def test_static_error_then_recovery():
    session = ReplSession()
    resp = request(session, cmd="eval", code="print ;")
    assert resp == {"ok": False, "output": [], "errors": ["[line 1] Error at ';': Expect expression."]}
    assert request(session, cmd="eval", code="print 5;") == {"ok": True, "output": ["5"], "errors": []}


def test_output_before_a_fault_is_kept():
    session = ReplSession()
    resp = request(session, cmd="eval", code='print "partial"; print 1 / 0;')
    assert resp["ok"] is False
    assert resp["output"] == ["partial"]


def test_bad_requests():
    session = ReplSession()
    assert request(session, cmd="run")["errors"] == ["Unknown cmd: run"]
    resp = handle_request(session, b"{not json")
    assert resp["ok"] is False
    assert resp["errors"][0].startswith("Invalid request:")


def test_address_defaults_from_environment(monkeypatch):
    monkeypatch.setenv("LOX_REPL_HOST", "0.0.0.0")
    monkeypatch.setenv("LOX_REPL_PORT", "9999")
    server = ReplServer()
    assert (server.host, server.port) == ("0.0.0.0", 9999)
    assert ReplServer("localhost", 0).port == 0


def test_deep_nesting_keeps_the_session_alive():
    session = ReplSession()
    code = "print " + "(" * 3000 + "1" + ")" * 3000 + ";"
    resp = request(session, cmd="eval", code=code)
    assert resp["ok"] is False
    assert resp["errors"][0].endswith("Too much nesting.")
    assert request(session, cmd="eval", code="print 3;")["output"] == ["3"]
