"""
AVB worst-case latency per hop.

Based on the formulas of IEEE 802.1BA Draft 2.5. The bound has been shown to be
optimistic and is therefore not guaranteed.
"""

from tsncf.application.sr import SRType
from tsncf.utils.types import EvaluatorConfig

DEFAULT_CONFIG = EvaluatorConfig()

# Preamble + start frame delimiter
PREAMBLE_BYTES = 8
IFG_BYTES = 12

# Interference of the TT schedule on a port. Not modelled yet.
TT_INTERFERENCE_US = 0.0


def transmission_time(frame_bytes: float, rate_mbps: float) -> float:
    """Time (us) to put one frame with preamble on the wire."""
    return (frame_bytes + PREAMBLE_BYTES) * 8 / rate_mbps


def calculate_max_latency(
    alloc_mbps: float,
    other_alloc_mbps: float,
    frame_size_bytes: int,
    sr_type: SRType = SRType.CLASS_A,
    config: EvaluatorConfig = DEFAULT_CONFIG,
) -> float:
    """
    Worst-case latency (us) of one stream over one hop.

    Args:
        alloc_mbps: Bandwidth reserved by the stream itself
        other_alloc_mbps: Bandwidth reserved on the hop by every other stream
        frame_size_bytes: Maximum frame size of the stream
        sr_type: Traffic class, selects the class measurement interval
        config: Link rate, device latency and best-effort frame size

    Returns:
        Latency bound of the hop in microseconds
    """
    rate = config.link_rate_mbps
    t_device = config.device_latency
    # Max interfering best-effort frame
    t_max_packet = transmission_time(config.max_be_frame_bytes, rate)
    t_stream_packet = transmission_time(frame_size_bytes, rate)
    t_ifg = IFG_BYTES * 8 / rate
    # Other same-class frames sent within one class measurement interval
    t_all_streams = other_alloc_mbps * sr_type.interval_us / rate

    return (
        t_device
        + t_max_packet
        + t_ifg
        + (t_all_streams - (t_stream_packet + t_ifg)) * (rate / alloc_mbps)
        + t_stream_packet
        + TT_INTERFERENCE_US
    )
