from arbitrary_precision_engine import ArbitraryPrecisionCalculatorEngine
from calculator_engine import CalculatorEngine
from calculator_errors import CalculatorError, ErrorKind
from formula_evaluator import FormulaEvaluator
from math_provider import PythonMathProvider
from number_formatter import NumberFormatter
import sys


def _evaluator() -> FormulaEvaluator:
	return FormulaEvaluator(PythonMathProvider())


def _display(expr: str, angle_mode: str = "deg") -> str:
	engine = CalculatorEngine()
	engine.angle_mode = angle_mode
	return engine.evaluate(expr)


def _error_kind(expr: str, angle_mode: str = "deg"):
	try:
		_evaluator().evaluate(expr, angle_mode)
	except CalculatorError as exc:
		return exc.kind
	return None


def inspect_expression(expr: str, *, angle_mode: str = "deg", digits: int = 30) -> None:
	"""Imprime tokens, postfija, valor y texto formateado de una expresión."""
	evaluator = _evaluator()

	print("Expression inspection")
	print(f"expr:           {expr}")
	print(f"angle mode:     {angle_mode}")
	try:
		tokens = evaluator.tokenize(expr)
		print(f"tokens:         {' '.join(str(t) for t in tokens)}")
		postfix = evaluator.to_postfix(tokens)
		print(f"postfix:        {' '.join(str(t) for t in postfix)}")
		value = evaluator.evaluate_postfix(postfix, angle_mode)
	except CalculatorError as exc:
		print(f"error:          {exc.kind.name} ({exc.message})")
		return

	print(f"value:          {value!r}")
	print(f"display:        {NumberFormatter.format(value)}")
	precise = ArbitraryPrecisionCalculatorEngine(initial_digits=digits, precision_step=digits)
	print(f"precise:        {precise.evaluate(expr, angle_mode)}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	for expr, expected in (
		("(2+3)*4-sqrt(16)/2", "18"),
		("2^3^2", "512"),
		("10-5-2", "3"),
		("-5+8", "3"),
		("(-2)^3", "-8"),
		("sin(90)", "1"),
		("0.1+0.2", "0.3"),
		("1.0168850428141299e-20+6", "6"),
		("2.5e+3 - 100", "2400"),
		("(1e-5 + 2e-5) * 3", "0.00009"),
		("factorial(5)", "120"),
		("12345678901", "1.23456789e+10"),
	):
		actual = _display(expr)
		expected_actual.append((expr, expected, actual))
		checks.append((f"{expr} displays {expected}", actual == expected))

	checks.append(("sin(0) in radians is 0", _display("sin(0)", "rad") == "0"))
	checks.append(("ten nested pairs evaluate", _display("(" * 10 + "7" + ")" * 10) == "7"))
	checks.append((
		"eleven nested pairs are mismatched",
		_error_kind("(" * 11 + "7" + ")" * 11) == ErrorKind.MISMATCHED_PARENTHESES,
	))
	checks.append(("extra close paren is mismatched", _error_kind("(1+2))") == ErrorKind.MISMATCHED_PARENTHESES))
	checks.append(("missing close paren is mismatched", _error_kind("((1+2)") == ErrorKind.MISMATCHED_PARENTHESES))
	checks.append(("division by zero is reported", _error_kind("1/0") == ErrorKind.DIVISION_BY_ZERO))
	checks.append(("sqrt of negative is reported", _error_kind("sqrt(-1)") == ErrorKind.INVALID_DOMAIN))
	checks.append(("unknown function is reported", _error_kind("foo(1)") == ErrorKind.UNKNOWN_FUNCTION))
	checks.append(("stray symbol is reported", _error_kind("2 $ 3") == ErrorKind.INVALID_CHARACTER))
	checks.append(("dangling operator is reported", _error_kind("3+") == ErrorKind.INVALID_EXPRESSION))
	checks.append(("factorial overflow displays Infinity", _display("factorial(200)") == "Infinity"))

	precise = ArbitraryPrecisionCalculatorEngine(initial_digits=20, precision_step=10)
	first = precise.evaluate("1/3")
	more = precise.request_more_precision()
	expected_actual.append(("1/3 with 20 digits", "0." + "3" * 20, first))
	checks.append(("precise 1/3 keeps 20 digits", first == "0." + "3" * 20))
	checks.append(("more precision adds 10 digits", more == "0." + "3" * 30))

	failed = [name for name, ok in checks if not ok]
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_checks.py
	#   python regression_checks.py --inspect "sin(30)+2^-1"
	#   python regression_checks.py --inspect "sin(30)" --rad --digits 50
	if "--inspect" in sys.argv:
		try:
			expr = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing expression after --inspect")

		def _read_int(flag: str, default: int) -> int:
			if flag not in sys.argv:
				return default
			idx = sys.argv.index(flag)
			try:
				return int(sys.argv[idx + 1])
			except (ValueError, IndexError):
				raise SystemExit(f"Invalid value for {flag}")

		inspect_expression(
			expr,
			angle_mode="rad" if "--rad" in sys.argv else "deg",
			digits=_read_int("--digits", 30),
		)
	else:
		run_regressions()
