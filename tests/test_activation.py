import itertools

from activation import FALLING, IDLE, ActivationStateMachine


def test_starts_idle_when_inactive():
    machine = ActivationStateMachine(False)
    assert machine.state == IDLE
    assert machine.transition_count == 0
    assert not machine.is_falling


def test_active_at_construction_falls_immediately():
    machine = ActivationStateMachine(True)
    assert machine.state == FALLING
    assert machine.transition_count == 1


def test_missing_input_counts_as_false():
    machine = ActivationStateMachine(None)
    assert machine.state == IDLE
    assert machine.update(None) is False
    assert machine.state == IDLE


def test_rising_edge_fires_once_and_never_reverts():
    machine = ActivationStateMachine(False)
    assert machine.update(True) is True
    assert machine.state == FALLING

    assert machine.update(False) is False
    assert machine.update(True) is False
    assert machine.update(True) is False
    assert machine.state == FALLING
    assert machine.transition_count == 1


def test_repeated_false_stays_idle():
    machine = ActivationStateMachine()
    for _ in range(5):
        assert machine.update(False) is False
    assert machine.state == IDLE


def test_no_input_sequence_returns_to_idle():
    for sequence in itertools.product([False, True, None], repeat=5):
        machine = ActivationStateMachine(sequence[0])
        was_falling = machine.is_falling
        for value in sequence[1:]:
            machine.update(value)
            if was_falling:
                assert machine.state == FALLING
            was_falling = machine.is_falling
        assert machine.transition_count == (1 if True in sequence else 0)
