import pytest

from bitcalc.ast import Evaluation, Literal
from bitcalc.config import CalcConfig
from bitcalc.environment import Environment
from bitcalc.errors import DivisionByZeroError, InvalidShiftError, UndefinedVariableError
from bitcalc.interpreter import Interpreter, evaluate_statement, run_line
from bitcalc.parser import parse_statement


def test_documented_example():
    assert run_line('(5 + 7) & !7') == 8


def test_bitwise_not_flips_all_sixteen_bits():
    assert run_line('!7') == 65528
    assert run_line('~0') == 65535


def test_literals_within_width_are_unchanged():
    for v in (0, 1, 12, 255, 32768, 65535):
        assert evaluate_statement(Evaluation(Literal(v)), Environment()) == v


def test_literals_wrap_to_width():
    assert run_line('65536') == 0
    assert run_line('70000') == 4464


def test_arithmetic_wraps_silently():
    assert run_line('65535 + 1') == 0
    assert run_line('0 - 1') == 65535
    assert run_line('300 * 300') == 24464


def test_negation_is_twos_complement():
    assert run_line('-5') == 65531
    assert run_line('- -5') == 5
    assert run_line('-5 + 5') == 0


def test_division_is_unsigned_and_truncating():
    assert run_line('7 / 2') == 3
    assert run_line('-6 / 2') == 32765


def test_bitwise_operators():
    assert run_line('6 & 3') == 2
    assert run_line('6 | 3') == 7
    assert run_line('6 ^ 3') == 5


def test_shifts():
    assert run_line('1 << 15') == 32768
    assert run_line('32768 >> 15') == 1
    assert run_line('65535 >> 4') == 4095
    assert run_line('3 << 15') == 32768


def test_shift_amount_is_taken_modulo_width():
    assert run_line('1 << 16') == 1
    assert run_line('1 << 17') == 2
    assert run_line('4 >> 18') == 1


def test_negative_shift_amount():
    with pytest.raises(InvalidShiftError) as exc:
        run_line('1 << -1')
    assert exc.value.amount == -1
    with pytest.raises(InvalidShiftError):
        run_line('1 >> 32768')


def test_division_by_zero_leaves_environment_unchanged():
    env = Environment()
    with pytest.raises(DivisionByZeroError):
        run_line('5 / 0', env)
    with pytest.raises(DivisionByZeroError):
        run_line('let x = 5 / 0', env)
    assert 'x' not in env
    assert len(env) == 0


def test_failed_rebinding_keeps_previous_value():
    env = Environment()
    run_line('let x = 3', env)
    with pytest.raises(UndefinedVariableError):
        run_line('let x = y + 1', env)
    assert env.get('x') == 3


def test_undefined_variable():
    with pytest.raises(UndefinedVariableError) as exc:
        run_line('y + 1')
    assert exc.value.name == 'y'


def test_left_operand_is_evaluated_first():
    with pytest.raises(UndefinedVariableError) as exc:
        run_line('a + b')
    assert exc.value.name == 'a'


def test_binding_then_lookup_matches_direct_evaluation():
    env = Environment()
    direct = run_line('(1000 * 70) ^ 3', env)
    assert run_line('let x = (1000 * 70) ^ 3', env) == direct
    assert run_line('x', env) == direct


def test_rebinding_overwrites():
    env = Environment()
    run_line('let x = 5', env)
    run_line('let x = 9', env)
    assert run_line('x', env) == 9


def test_binding_can_refer_to_previous_value():
    env = Environment()
    run_line('let x = 1', env)
    run_line('let x = x << 4', env)
    assert env.get('x') == 16


def test_parentheses_change_result():
    assert run_line('(5 + 7) & 8') == 8
    assert run_line('5 + (7 & 8)') == 5


def test_precedence_preset_changes_result():
    assert run_line('4 + 4 & 4') == 8
    assert run_line('4 + 4 & 4', config=CalcConfig(precedence='c')) == 0


def test_evaluation_is_idempotent():
    env = Environment()
    run_line('let a = 1234', env)
    first = run_line('a * 3 ^ !a', env)
    second = run_line('a * 3 ^ !a', env)
    assert first == second
    assert env.get('a') == 1234


def test_eight_bit_width():
    config = CalcConfig(width=8)
    assert run_line('!0', config=config) == 255
    assert run_line('200 + 100', config=config) == 44
    assert run_line('1 << 9', config=config) == 2


def test_unknown_node_type():
    with pytest.raises(TypeError):
        Interpreter().evaluate('x', Environment())
    with pytest.raises(TypeError):
        Interpreter().execute(Literal(1), Environment())


def test_debug_file_records_operations(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    interp = Interpreter(debug_level=3, debug_file=str(debug_file))
    env = Environment()
    interp.execute(parse_statement('let x = 2 + 3'), env)
    interp.execute(parse_statement('x & 4'), env)
    interp.close()
    log = debug_file.read_text(encoding='utf-8').splitlines()
    assert '2 + 3 = 5' in log
    assert 'let x = 5' in log
    assert 'lookup x -> 5' in log
    assert '(& x 4) => 4' in log


def test_no_debug_file_by_default(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Interpreter().execute(parse_statement('1'), Environment())
    assert not (tmp_path / 'debug.txt').exists()
