from timeit import timeit

from lox.evaluation.interpreter import Interpreter
from lox.evaluation.resolver import Resolver
from lox.reader.parser import parse
from lox.reader.scanner import scan
from lox.reporter import ErrorReporter
from lox.types.environment import Environment
from lox.types.token import synthetic


def _prepare(code: str):
    """Scan, parse and resolve once so the timed part is evaluation only."""
    reporter = ErrorReporter()
    statements = parse(scan(code, reporter), reporter)
    table = Resolver(reporter).resolve(statements)
    if reporter.had_error:
        raise SystemExit(f"benchmark source has errors: {reporter.diagnostics}")
    return statements, table


def time_interpreter(code: str, rounds: int) -> float:
    """Time the tree-walker on pre-resolved statements, one fresh global scope per round."""
    statements, table = _prepare(code)

    def once():
        itp = Interpreter(output=lambda _: None)
        itp.resolve(table)
        itp.interpret(statements)

    # Warmup
    once()
    # Timed
    return timeit(once, number=rounds)


def time_front_end(code: str, rounds: int) -> float:
    """Time scanning, parsing and resolution without running anything."""
    return timeit(lambda: _prepare(code), number=rounds)


# Environment micro-benchmark: distance lookup vs dynamic search

def bench_lookup_chain(n_envs: int = 1000, n_lookups: int = 10000) -> tuple[float, float]:
    root = Environment()
    key = synthetic("answer")
    root.define(key.lexeme, 42.0)
    env = root
    for _ in range(n_envs):
        env = Environment(env)
    # Warmup
    for _ in range(1000):
        env.get(key)
    dynamic = timeit(lambda: env.get(key), number=n_lookups)
    resolved = timeit(lambda: env.get_at(n_envs, key), number=n_lookups)
    return dynamic, resolved


FIB_CODE = r"""
fun fib(n) {
  if (n < 2) return n;
  return fib(n - 1) + fib(n - 2);
}
print fib(15);
"""

LOOP_SUM_CODE = r"""
var sum = 0;
for (var i = 0; i < 5000; i = i + 1) {
  sum = sum + i;
}
print sum;
"""

METHOD_CALL_CODE = r"""
class Counter {
  init() { this.n = 0; }
  inc() { this.n = this.n + 1; return this; }
}
var c = Counter();
for (var i = 0; i < 2000; i = i + 1) c.inc();
print c.n;
"""

CLOSURE_CODE = r"""
fun makeAdder(n) {
  fun add(x) { return x + n; }
  return add;
}
var total = 0;
for (var i = 0; i < 2000; i = i + 1) total = makeAdder(i)(total);
print total;
"""


def _print_result(name: str, code: str, rounds: int) -> None:
    front = time_front_end(code, rounds)
    run = time_interpreter(code, rounds)
    print(f"Benchmark: {name}")
    print(f"  front end: {front:.6f}s  |  interpreter: {run:.6f}s  [rounds={rounds}]")


if __name__ == "__main__":
    dynamic, resolved = bench_lookup_chain()
    print("Benchmark: environment lookup chain (1000 scopes)")
    print(f"  get (search): {dynamic:.6f}s  |  get_at (resolved distance): {resolved:.6f}s")

    _print_result("recursive fib(15)", FIB_CODE, rounds=5)
    _print_result("for-loop sum 0..5000", LOOP_SUM_CODE, rounds=20)
    _print_result("method calls on an instance", METHOD_CALL_CODE, rounds=20)
    _print_result("closure creation and call", CLOSURE_CODE, rounds=20)
