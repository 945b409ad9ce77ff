class RollCRCError(Exception):
    """Base class for rollcrc-specific errors."""


# Engine/buffer state
class EngineStateError(RollCRCError):
    """Engine reached the rolling state without an open CRC.

    This is a defect in the engine itself, never the result of bad input.
    """


class RingBufferFull(RollCRCError):
    pass


# CLI
class TargetError(RollCRCError):
    pass
