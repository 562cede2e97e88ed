"""
Exceptions raised by the monitoring components.
"""


class SamplerUnavailableError(RuntimeError):
    """
    Raised when the operating system's resource counters cannot be read at all.

    Edge cases such as zero cores or counter resets never raise. Only a failure
    of the introspection layer itself does, and it is never reported as zeros.
    """
