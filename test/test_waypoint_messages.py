"""
test_waypoint_messages.py
=========================
Tests for the ROS message side of the recorder: the Twist built from each
gamepad event and the RViz arrow marker built for each save.

Needs the ROS2 message packages (geometry_msgs, visualization_msgs) but
not a running node; skipped when they are not installed.
"""

import pytest

pytest.importorskip('geometry_msgs')
pytest.importorskip('visualization_msgs')

from visualization_msgs.msg import Marker  # noqa: E402

from waypoint_maker_py.waypoint_context import (  # noqa: E402
    PoseEvent,
    SaveResult,
    TickResult,
    VelocityCommand,
    Waypoint,
)
from waypoint_maker_py.waypoint_messages import (  # noqa: E402
    build_arrow_marker,
    build_twist,
    publish_tick_result,
)


class FakePublisher:
    def __init__(self):
        self.messages = []

    def publish(self, msg):
        self.messages.append(msg)


def make_save(marker_id, saved=True):
    pose = PoseEvent(1.0, 2.0, 0.0, 1.0)
    return SaveResult(waypoint=Waypoint(1.0, 2.0, 0.0), pose=pose, saved=saved, marker_id=marker_id)


# ══════════════════════════════════════════════════════════════
# 1. ARROW MARKER
# ══════════════════════════════════════════════════════════════

class TestArrowMarker:

    def setup_method(self):
        self.pose = PoseEvent(1.5, -2.0, 0.3, 0.95)
        self.marker = build_arrow_marker(7, self.pose, 'map', 'waypoints')

    def test_identity(self):
        assert self.marker.header.frame_id == 'map'
        assert self.marker.ns == 'waypoints'
        assert self.marker.id == 7
        assert self.marker.type == Marker.ARROW
        assert self.marker.action == Marker.ADD

    def test_pose(self):
        p = self.marker.pose
        assert (p.position.x, p.position.y, p.position.z) == (1.5, -2.0, 0.0)
        assert (p.orientation.x, p.orientation.y) == (0.0, 0.0)
        assert p.orientation.z == pytest.approx(0.3)
        assert p.orientation.w == pytest.approx(0.95)

    def test_scale(self):
        s = self.marker.scale
        assert (s.x, s.y, s.z) == pytest.approx((0.3, 0.1, 0.0))

    def test_solid_red(self):
        c = self.marker.color
        assert (c.r, c.g, c.b, c.a) == (1.0, 0.0, 0.0, 1.0)

    def test_configured_frame_and_namespace(self):
        marker = build_arrow_marker(0, self.pose, 'odom', 'recorded')
        assert (marker.header.frame_id, marker.ns) == ('odom', 'recorded')

    def test_stamp_applied(self):
        from builtin_interfaces.msg import Time

        marker = build_arrow_marker(0, self.pose, 'map', 'waypoints', Time(sec=12, nanosec=34))
        assert (marker.header.stamp.sec, marker.header.stamp.nanosec) == (12, 34)


# ══════════════════════════════════════════════════════════════
# 2. PUBLISHING A TICK
# ══════════════════════════════════════════════════════════════

class TestPublishTickResult:

    def setup_method(self):
        self.cmd_vel_pub = FakePublisher()
        self.marker_pub = FakePublisher()

    def publish(self, result):
        publish_tick_result(result, self.cmd_vel_pub, self.marker_pub, 'map', 'waypoints')

    def test_twist_from_command(self):
        twist = build_twist(VelocityCommand(linear_x=-0.75, angular_z=0.25))
        assert twist.linear.x == -0.75
        assert twist.angular.z == 0.25
        assert (twist.linear.y, twist.linear.z) == (0.0, 0.0)
        assert (twist.angular.x, twist.angular.y) == (0.0, 0.0)

    def test_one_twist_per_command(self):
        commands = [VelocityCommand(0.1, 0.0), VelocityCommand(0.2, -0.1), VelocityCommand(0.0, 0.3)]
        self.publish(TickResult(commands=commands))

        assert [t.linear.x for t in self.cmd_vel_pub.messages] == [0.1, 0.2, 0.0]
        assert [t.angular.z for t in self.cmd_vel_pub.messages] == [0.0, -0.1, 0.3]
        assert self.marker_pub.messages == []

    def test_marker_published_for_save(self):
        self.publish(TickResult(save=make_save(marker_id=3)))

        assert len(self.marker_pub.messages) == 1
        assert self.marker_pub.messages[0].id == 3
        assert self.marker_pub.messages[0].pose.position.x == 1.0

    def test_failed_save_with_marker_still_published(self):
        self.publish(TickResult(save=make_save(marker_id=0, saved=False)))
        assert len(self.marker_pub.messages) == 1

    def test_no_marker_without_id(self):
        self.publish(TickResult(commands=[VelocityCommand(0.5, 0.0)], save=make_save(None, saved=False)))

        assert self.marker_pub.messages == []
        assert len(self.cmd_vel_pub.messages) == 1
