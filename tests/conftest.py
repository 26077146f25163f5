import pytest

SAMPLE_SOURCE = """\
PROGRAM hop IS

  INSTRUCTION twice IS
    move
    move
  END twice

  INSTRUCTION spin IS
    turnleft
    turnleft
  END spin

BEGIN
  twice
  spin
  infect
END hop
"""

NESTED_SOURCE = """\
PROGRAM patrol IS

  INSTRUCTION step IS
    IF next-is-empty THEN
      move
    ELSE
      turnright
    END IF
  END step

BEGIN
  WHILE true DO
    step
    IF next-is-enemy THEN
      infect
    END IF
  END WHILE
END patrol
"""


@pytest.fixture  # type: ignore[misc]
def sample_source() -> str:
    return SAMPLE_SOURCE


@pytest.fixture  # type: ignore[misc]
def nested_source() -> str:
    return NESTED_SOURCE
