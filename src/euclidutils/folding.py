"""Euclidean folding: the Euclidean algorithm modelled as two segments folding onto each other.

Two segments of lengths `a` and `b` form a V. Each fold lays the shorter arm onto the longer one and cuts the
overlap off, which is one subtraction step of the Euclidean algorithm. In modulo mode the `k - 1` folds that lay
the shorter arm along the longer one before the last fold are collapsed into a single step and counted as quick
folds. The arms end up equal, at the gcd.

Besides the step sequence, this module computes the coordinates a renderer needs to draw each state and each
phase of a fold. It draws nothing itself.

Typical usage example:

    seq = generate_steps(48, 18, use_modulo=True)
    geo = static_v(seq.steps[0].left, seq.steps[0].right)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import math
import typing

import structlog

logger = structlog.wrap_logger(logging.getLogger(__name__))

MAX_FOLD_STEPS: int = 100

VIEW_WIDTH: int = 820
VIEW_HEIGHT: int = 620
PIVOT_X: float = VIEW_WIDTH / 2
PIVOT_Y: float = VIEW_HEIGHT - 60

_FILL = 0.8
_LEFT_ANGLE = 135
_RIGHT_ANGLE = 45
_LABEL_BEYOND = 30
_COS45 = math.cos(math.radians(45))


class FoldStep(typing.NamedTuple):
    """One resting state of the two arms.

    Attributes:
        left: Length of the left arm.
        right: Length of the right arm.
        quick_folds: Same-direction folds collapsed into the jump to this state. Always 0 in subtraction mode.
    """
    left: int
    right: int
    quick_folds: int = 0


class FoldSequence(typing.NamedTuple):
    steps: tuple[FoldStep, ...]
    gcd: int
    too_many: bool = False


class Point(typing.NamedTuple):
    x: float
    y: float


class ArmGeo(typing.NamedTuple):
    start: Point
    end: Point
    beads: tuple[Point, ...]
    label_pos: Point
    value: int


class BackgroundLine(typing.NamedTuple):
    start: Point
    end: Point
    opacity: float


class VGeo(typing.NamedTuple):
    """Geometry of both arms around the pivot, plus the fading outline of the original arm when one is shown."""
    pivot: Point
    left: ArmGeo
    right: ArmGeo
    bg_line: BackgroundLine | None = None


def generate_steps(a: int, b: int, use_modulo: bool = False) -> FoldSequence:
    """Generates the fold sequence for two segment lengths.

    The first step is the initial pair and the last step has both arms at the gcd. Inputs that are not positive
    integers give an empty sequence. Sequences growing past `MAX_FOLD_STEPS` are abandoned and flagged instead,
    which mostly happens for large coprime inputs in subtraction mode.

    Args:
        a: Length of the left arm.
        b: Length of the right arm.
        use_modulo: Whether to collapse repeated same-direction folds into a single division step.

    Returns:
        The fold sequence along with the gcd it arrives at.
    """
    # bool is an int subclass but never a segment length.
    if any(not isinstance(x, int) or isinstance(x, bool) or x <= 0 for x in (a, b)):
        return FoldSequence((), 0)
    if a == b:
        return FoldSequence((FoldStep(a, b),), a)

    steps = [FoldStep(a, b)]
    left, right = a, b
    while left != right and left > 0 and right > 0:
        if len(steps) > MAX_FOLD_STEPS:
            logger.warning("fold_step_cap_exceeded", a=a, b=b, use_modulo=use_modulo, cap=MAX_FOLD_STEPS)
            return FoldSequence((), 0, too_many=True)
        short, long = min(left, right), max(left, right)
        if use_modulo:
            k, rem = divmod(long, short)
            if rem == 0:
                steps.append(FoldStep(short, short, k - 1))
                break
            if left <= right:
                right = rem
            else:
                left = rem
            steps.append(FoldStep(left, right, k - 1))
        else:
            if left <= right:
                right -= left
            else:
                left -= right
            steps.append(FoldStep(left, right))

    last = steps[-1]
    logger.debug("fold_sequence_generated", a=a, b=b, use_modulo=use_modulo, steps=len(steps))
    return FoldSequence(tuple(steps), last.left or last.right)


def bead_count(length: int) -> int:
    """Number of beads drawn on an arm, thinned out by powers of ten for long arms."""
    if length <= 0:
        return 0
    if length <= 100:
        return length
    if length <= 1_000:
        return length // 10
    if length <= 10_000:
        return length // 100
    return length // 1_000


def compute_scale(max_len: float) -> float:
    """Pixels per unit length such that an arm of `max_len` at 45° fits the view box."""
    if max_len <= 0:
        return 1
    h_max = (PIVOT_X - 20) * _FILL
    v_max = (PIVOT_Y - 20) * _FILL
    return min(h_max / (max_len * _COS45), v_max / (max_len * _COS45))


def point_at(origin: Point, deg: float, dist: float) -> Point:
    """Point at distance `dist` from `origin` along the mathematical angle `deg` (0° right, 90° up)."""
    rad = math.radians(deg)
    return Point(origin.x + dist * math.cos(rad), origin.y - dist * math.sin(rad))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def lerp_point(a: Point, b: Point, t: float) -> Point:
    return Point(lerp(a.x, b.x, t), lerp(a.y, b.y, t))


def _bead_positions(start: Point, end: Point, n: int) -> tuple[Point, ...]:
    return tuple(lerp_point(start, end, i / n) for i in range(1, n + 1))


def _build_arm(start: Point, end: Point, value: int) -> ArmGeo:
    dx, dy = end.x - start.x, end.y - start.y
    length = math.hypot(dx, dy)
    label_pos = end
    if length > 0:
        label_pos = Point(end.x + dx / length * _LABEL_BEYOND, end.y + dy / length * _LABEL_BEYOND)
    return ArmGeo(start, end, _bead_positions(start, end, bead_count(value)), label_pos, value)


def static_v(left: int, right: int) -> VGeo:
    """Resting V for a fold state, left arm at 135° and right arm at 45°."""
    scale = compute_scale(max(left, right, 1))
    pivot = Point(PIVOT_X, PIVOT_Y)
    return VGeo(
        pivot,
        _build_arm(pivot, point_at(pivot, _LEFT_ANGLE, left * scale), left),
        _build_arm(pivot, point_at(pivot, _RIGHT_ANGLE, right * scale), right),
    )


def fold_direction(left: int, right: int) -> typing.Literal["left", "right"]:
    """The arm that folds over, always the shorter one. Ties fold the left arm."""
    return "left" if left <= right else "right"


def fold_phase(left: int, right: int, t: float, offset: int = 0) -> VGeo:
    """Overlap fold: the shorter arm swings 90° onto the longer one.

    Args:
        left: Current left arm length.
        right: Current right arm length.
        t: Progress of the fold, 0 to 1.
        offset: How many shorter-arm lengths the fold pivot has already advanced along the longer arm.
            0 for the first or only fold.

    Returns:
        The geometry at progress `t`.
    """
    direction = fold_direction(left, right)
    short, long = min(left, right), max(left, right)
    scale = compute_scale(max(left, right, 1))
    centre = Point(PIVOT_X, PIVOT_Y)
    long_angle = _RIGHT_ANGLE if direction == "left" else _LEFT_ANGLE
    fold_pivot = point_at(centre, long_angle, offset * short * scale)

    if direction == "left":
        angle = _LEFT_ANGLE - 90 * t
        return VGeo(
            fold_pivot,
            _build_arm(fold_pivot, point_at(fold_pivot, angle, short * scale), short),
            _build_arm(centre, point_at(centre, _RIGHT_ANGLE, long * scale), long),
        )
    angle = _RIGHT_ANGLE + 90 * t
    return VGeo(
        fold_pivot,
        _build_arm(centre, point_at(centre, _LEFT_ANGLE, long * scale), long),
        _build_arm(fold_pivot, point_at(fold_pivot, angle, short * scale), short),
    )


def swing_phase(left: int, right: int, u: float, total_folds: int = 1) -> VGeo:
    """Swing-out and re-centre after the overlap folds.

    The folded arm swings back out while the pivot slides back to the centre and the scale eases towards the one
    fitting the new pair of lengths.

    Args:
        left: Left arm length before the fold.
        right: Right arm length before the fold.
        u: Progress of the swing, 0 to 1.
        total_folds: Overlap folds done before the swing. 1 in subtraction mode, `k` in modulo mode.

    Returns:
        The geometry at progress `u`, with a fading outline of the original longer arm if several folds were done.
    """
    direction = fold_direction(left, right)
    short, long = min(left, right), max(left, right)
    rem = abs(long - total_folds * short)
    old_scale = compute_scale(max(left, right, 1))
    scale = lerp(old_scale, compute_scale(max(short, rem, 1)), u)
    centre = Point(PIVOT_X, PIVOT_Y)

    long_angle, back_angle = (_RIGHT_ANGLE, 225 - 90 * u) if direction == "left" else (_LEFT_ANGLE, 315 + 90 * u)
    fold_pivot = point_at(centre, long_angle, total_folds * short * old_scale)
    pivot = lerp_point(fold_pivot, centre, u)
    back = _build_arm(pivot, point_at(pivot, back_angle, short * scale), short)
    extra = _build_arm(pivot, point_at(pivot, long_angle, rem * scale), rem)
    bg_line = None
    if total_folds > 1:
        bg_line = BackgroundLine(centre, point_at(centre, long_angle, long * old_scale), 1 - u)
    if direction == "left":
        return VGeo(pivot, back, extra, bg_line)
    return VGeo(pivot, extra, back, bg_line)


def morph_to_v(start: VGeo, left: int, right: int, u: float) -> VGeo:
    """Linear interpolation from a collapsed fold to the resting V, used when the shorter arm divides the longer."""
    target = static_v(left, right)
    pivot = lerp_point(start.pivot, target.pivot, u)
    return VGeo(
        pivot,
        _build_arm(pivot, lerp_point(start.left.end, target.left.end, u), left),
        _build_arm(pivot, lerp_point(start.right.end, target.right.end, u), right),
    )
