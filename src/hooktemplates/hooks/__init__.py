"""Extension bus: filters, actions and output capture.

Basic usage:
    from hooktemplates.hooks import HookBus, capture_output, echo

    bus = HookBus()
    bus.add_action("banner", lambda: echo("<b>sale</b>"))

    with capture_output() as buffer:
        bus.do_action("banner")

    buffer.getvalue()  # "<b>sale</b>"
"""

from ._bus import DEFAULT_PRIORITY, HookBus, HookRegistration
from ._output import OutputBuffer, capture_output, echo
from ._topics import TOPIC_NAMESPACE, Topic, build_topic

__all__ = [
    "DEFAULT_PRIORITY",
    "TOPIC_NAMESPACE",
    "HookBus",
    "HookRegistration",
    "OutputBuffer",
    "Topic",
    "build_topic",
    "capture_output",
    "echo",
]
