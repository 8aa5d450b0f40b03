import pytest

from duckpond.gl import GLError, RenderingMode


@pytest.mark.parametrize(
    "code, expected",
    [(0x0001, "LINES"), (0x0004, "TRIANGLES"), (0x000E, "PATCHES")],
)
def test_rendering_mode_matches_gl_enums(code, expected):
    assert RenderingMode(code).name == expected


def test_rendering_mode_rejects_unknown_code():
    with pytest.raises(ValueError):
        RenderingMode(0x0002)


def test_gl_error_carries_code_and_description():
    error = GLError(0x502, "glDrawElements")
    assert error.code == 0x502
    assert error.description == "glDrawElements"
    assert "0x502" in str(error)
    assert "glDrawElements" in str(error)


def test_gl_error_message_format_and_base_class():
    error = GLError(0x500, "glBindBuffer")
    assert isinstance(error, RuntimeError)
    assert error.code == 0x500
    assert str(error) == "[OpenGL Error] (0x500): glBindBuffer"