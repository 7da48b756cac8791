import pytest

from blockmatch import AssemblyError, Begin, End, If, Not, Or, Push, assemble, disassemble, parse_instruction


def test_assemble_mixed_separators_and_comments():
    text = """
    # outer block
    begin; IF, push 2
    push(0x3), end   # inner
    end
    """
    assert assemble(text) == [Begin, If, Push(2), Push(3), End, End]


def test_parse_single_instructions():
    assert parse_instruction("Not") == Not
    assert parse_instruction("  or ") == Or
    assert parse_instruction("push   10") == Push(10)
    assert parse_instruction("end()") == End


@pytest.mark.parametrize(
    "token",
    ["jump", "push", "push x", "push -1", "push 1 2", "end 3", "push()", "push +3", "push 1_000", "push \u0663", "push 0x"],
)
def test_parse_rejects_bad_tokens(token):
    with pytest.raises(AssemblyError):
        parse_instruction(token)


def test_error_reports_token_position():
    with pytest.raises(AssemblyError) as excinfo:
        assemble("begin, push 1, halt, end")
    assert excinfo.value.position == 2
    assert excinfo.value.token == "halt"
    assert "token 2" in str(excinfo.value)


def test_disassemble_is_readable():
    program = [Begin, Push(1), End]
    assert disassemble(program) == "begin, push 1, end"
    assert assemble(disassemble(program)) == program


def test_empty_text_assembles_to_empty_program():
    assert assemble("# nothing here\n") == []


def test_hex_operands_accept_either_prefix_case():
    assert parse_instruction("push 0X1f") == Push(31)
    assert parse_instruction("push 007") == Push(7)
