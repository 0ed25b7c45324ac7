"""
Global configuration for Triton-Tonecrop.

Author: yuhezhang-ai
"""

import os


# Tile shape for the 2-D kernel launch grid (one program per BLOCK_H x BLOCK_W pixels)
BLOCK_H = int(os.getenv('TRITON_TONECROP_BLOCK_H', '16'))
BLOCK_W = int(os.getenv('TRITON_TONECROP_BLOCK_W', '16'))

# Appended to the input basename when deriving output file names
OUTPUT_SUFFIX = os.getenv('TRITON_TONECROP_OUTPUT_SUFFIX', '_tonecrop')

# Copy the grayscale plane back to the host between the reduce and crop stages.
# Set TRITON_TONECROP_DEVICE_RESIDENT=1 to keep it on the device instead.
HOST_ROUND_TRIP = os.getenv('TRITON_TONECROP_DEVICE_RESIDENT', '0') != '1'

# Progress messages on stderr
VERBOSE = os.getenv('TRITON_TONECROP_QUIET', '0') != '1'


def enable_host_round_trip():
    """
    Materialize the grayscale plane on the host between stages (default).

    Example:
        ```python
        import triton_tonecrop as tc
        tc.enable_host_round_trip()
        ```
    """
    global HOST_ROUND_TRIP
    HOST_ROUND_TRIP = True


def disable_host_round_trip():
    """
    Keep the grayscale plane device-resident between the reduce and crop stages.

    Output is identical; one device-to-host and one host-to-device copy per
    image are skipped.
    """
    global HOST_ROUND_TRIP
    HOST_ROUND_TRIP = False


def is_host_round_trip_enabled() -> bool:
    """
    Check whether the host round-trip between stages is enabled.

    Returns:
        bool: True if the grayscale plane is copied to the host and back
    """
    return HOST_ROUND_TRIP


def set_verbose(verbose: bool):
    """Turn stderr progress messages on or off."""
    global VERBOSE
    VERBOSE = bool(verbose)


__all__ = [
    'BLOCK_H',
    'BLOCK_W',
    'OUTPUT_SUFFIX',
    'HOST_ROUND_TRIP',
    'VERBOSE',
    'enable_host_round_trip',
    'disable_host_round_trip',
    'is_host_round_trip_enabled',
    'set_verbose',
]
