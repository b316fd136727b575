"""
Line tools - MCP tools for interval arithmetic.

Tools for inspecting lines, stacking and reducing intervals, inverting
chords and factorizing numbers.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_tuning.constants import ErrorMessages, LineType
from chuk_mcp_tuning.core import (
    get_line_type,
    get_prime_factors,
    get_prime_limit,
    get_primes_of_ratio,
    invert_chord,
    line_to_cents,
    line_to_decimal,
    modulo_line,
    stack_lines,
    stack_self,
)
from chuk_mcp_tuning.core.lines import parse_ratio
from chuk_mcp_tuning.core.numbers import PRIMES

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _describe(line: str) -> dict[str, Any]:
    """Type and canonical values of a line."""
    line_type = get_line_type(line)
    info: dict[str, Any] = {
        "line": line.strip(),
        "type": line_type.value,
        "cents": line_to_cents(line),
        "decimal": line_to_decimal(line),
    }
    if line_type == LineType.RATIO:
        numerator, denominator = parse_ratio(line)
        info["prime_limit"] = get_primes_of_ratio(numerator, denominator)[0]
    return info


def _describe_type(line: str) -> dict[str, Any]:
    return {"type": get_line_type(line).value, "cents": line_to_cents(line)}


def register_line_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register line arithmetic tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_line_info(line: str) -> str:
        """
        Classify a scale line and convert it to cents and decimal.

        Args:
            line: A line like '3/2', '7\\12', '1,5', '700' or '701.955'

        Returns:
            JSON string with the line type, cents, decimal and (for ratios) prime limit

        Example:
            tuning_line_info(line="5/4")
        """
        try:
            return json.dumps({"status": "success", **_describe(line)})
        except (ValueError, ZeroDivisionError) as e:
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_line_info"] = tuning_line_info

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_stack_lines(line1: str, line2: str) -> str:
        """
        Stack two intervals.

        Ratios stay ratios and EDO steps stay EDO steps; other
        combinations are summed in cents.

        Args:
            line1: First interval
            line2: Second interval

        Returns:
            JSON string with the stacked line

        Example:
            tuning_stack_lines(line1="3/2", line2="4/3")
        """
        try:
            result = stack_lines(line1, line2)
            return json.dumps({"status": "success", "result": result, **_describe_type(result)})
        except (ValueError, ZeroDivisionError) as e:
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_stack_lines"] = tuning_stack_lines

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_stack_self(line: str, times: float) -> str:
        """
        Stack an interval on itself (raise it to a power).

        Args:
            line: The interval
            times: Number of stacks; negative values go down

        Returns:
            JSON string with the resulting line

        Example:
            tuning_stack_self(line="3/2", times=4)
        """
        try:
            result = stack_self(line, times)
            return json.dumps({"status": "success", "result": result, **_describe_type(result)})
        except (ValueError, ZeroDivisionError, OverflowError) as e:
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_stack_self"] = tuning_stack_self

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_modulo_line(line: str, period: str = "2/1") -> str:
        """
        Reduce an interval into a period (octave by default).

        Args:
            line: The interval
            period: The period to reduce by

        Returns:
            JSON string with the reduced line

        Example:
            tuning_modulo_line(line="9/4", period="2/1")
        """
        try:
            result = modulo_line(line, period)
            return json.dumps({"status": "success", "result": result, **_describe_type(result)})
        except (ValueError, ZeroDivisionError) as e:
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_modulo_line"] = tuning_modulo_line

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_invert_chord(chord: str) -> str:
        """
        Invert the interval order of a chord given as harmonics.

        Args:
            chord: Colon separated integers, like '4:5:6'

        Returns:
            JSON string with the inverted chord

        Example:
            tuning_invert_chord(chord="4:5:6")  # -> 10:12:15
        """
        result = invert_chord(chord)
        if result is None:
            return json.dumps(
                {"status": "error", "message": ErrorMessages.INVALID_CHORD.format(chord=chord)}
            )
        return json.dumps({"status": "success", "chord": chord, "inverted": result})

    tools["tuning_invert_chord"] = tuning_invert_chord

    @mcp.tool  # type: ignore[arg-type]
    async def tuning_prime_factors(number: int) -> str:
        """
        Factorize a whole number.

        Args:
            number: A positive integer

        Returns:
            JSON string with {prime: exponent} and the prime limit

        Example:
            tuning_prime_factors(number=12)  # 2^2 * 3
        """
        try:
            factors = get_prime_factors(number)
            vector = [] if isinstance(factors, int) else factors
            return json.dumps(
                {
                    "status": "success",
                    "number": number,
                    "factors": {
                        str(PRIMES[i]): exponent for i, exponent in enumerate(vector) if exponent
                    },
                    "prime_limit": get_prime_limit(number),
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})

    tools["tuning_prime_factors"] = tuning_prime_factors

    return tools
