import csv
import math
from collections import deque
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class GamepadEvent:
    buttons: List[int]
    axes: List[float]


@dataclass
class PoseEvent:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0


@dataclass
class VelocityCommand:
    linear_x: float
    angular_z: float


@dataclass
class Waypoint:
    x: float
    y: float
    yaw: float

    def to_row(self):
        return [f'{self.x:f}', f'{self.y:f}', f'{self.yaw:f}']


@dataclass
class RecorderSettings:
    waypoints_csv: str = 'waypoints.csv'
    save_button: int = 2
    linear_axis: int = 3
    angular_axis: int = 0
    publish_marker_on_failure: bool = True


@dataclass
class SaveResult:
    """Outcome of one processed save request.

    ``marker_id`` is None when no marker should be published for it.
    """
    waypoint: Waypoint
    pose: PoseEvent
    saved: bool
    marker_id: Optional[int]


@dataclass
class TickResult:
    commands: List[VelocityCommand] = field(default_factory=list)
    save: Optional[SaveResult] = None


@dataclass
class RecorderContext:
    pose: PoseEvent = field(default_factory=PoseEvent)
    save_requested: bool = False
    next_marker_id: int = 0
    inbox: deque = field(default_factory=deque)


def loop_period(loop_rate, logger):
    if loop_rate <= 0.0:
        logger.error(f'Parameter loop_rate must be positive, got {loop_rate}')
        raise ValueError(f'loop_rate must be positive: {loop_rate}')
    return 1.0 / loop_rate


def yaw_from_quaternion(z, w):
    # Planar motion only: roll and pitch are zero.
    return math.atan2(2.0 * (w * z), 1.0 - 2.0 * (z * z))


def handle_gamepad(context, event, settings):
    if event.buttons[settings.save_button] == 1:
        context.save_requested = True

    return VelocityCommand(
        linear_x=float(event.axes[settings.linear_axis]),
        angular_z=float(event.axes[settings.angular_axis]),
    )


def handle_pose(context, event):
    context.pose = event


def drain_inbox(context, settings):
    """Apply every queued event in arrival order.

    Returns one velocity command per gamepad event.
    """
    commands = []
    while context.inbox:
        event = context.inbox.popleft()
        if isinstance(event, GamepadEvent):
            commands.append(handle_gamepad(context, event, settings))
        elif isinstance(event, PoseEvent):
            handle_pose(context, event)
        else:
            raise TypeError(f'Unsupported event type: {type(event).__name__}')
    return commands


def append_waypoint(path, waypoint, logger):
    try:
        with open(path, mode='a', newline='') as csv_file:
            writer = csv.writer(csv_file, lineterminator='\n')
            writer.writerow(waypoint.to_row())
    except OSError as e:
        logger.error(f'Failed to write waypoint to CSV file {path}: {e}')
        return False

    logger.info(f'Saved waypoint: [{waypoint.x:f}, {waypoint.y:f}, {waypoint.yaw:f}]')
    return True


def read_waypoints(path):
    waypoints = []
    with open(path, mode='r', newline='') as csv_file:
        reader = csv.reader(csv_file)
        for row in reader:
            if not row:
                continue
            waypoints.append(Waypoint(float(row[0]), float(row[1]), float(row[2])))
    return waypoints


def process_save(context, settings, logger):
    if not context.save_requested:
        return None

    pose = context.pose
    logger.info(f'Current position: x = {pose.x:f}, y = {pose.y:f}')

    waypoint = Waypoint(pose.x, pose.y, yaw_from_quaternion(pose.z, pose.w))
    saved = append_waypoint(settings.waypoints_csv, waypoint, logger)

    marker_id = None
    if saved or settings.publish_marker_on_failure:
        marker_id = context.next_marker_id
        context.next_marker_id += 1

    context.save_requested = False
    return SaveResult(waypoint=waypoint, pose=pose, saved=saved, marker_id=marker_id)


def tick(context, settings, logger):
    commands = drain_inbox(context, settings)
    return TickResult(commands=commands, save=process_save(context, settings, logger))
