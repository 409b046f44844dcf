import os

import rclpy
from rclpy.node import Node
from geometry_msgs.msg import PoseWithCovarianceStamped, Twist
from sensor_msgs.msg import Joy
from visualization_msgs.msg import Marker

from waypoint_maker_py.waypoint_context import (
    GamepadEvent,
    PoseEvent,
    RecorderContext,
    RecorderSettings,
    loop_period,
    read_waypoints,
    tick,
)
from waypoint_maker_py.waypoint_messages import publish_tick_result


class WaypointRecorder(Node):
    def __init__(self):
        super().__init__('waypoint_recorder')

        # Parameters
        self.declare_parameter('waypoints_csv', 'waypoints.csv')
        self.declare_parameter('save_button', 2)
        self.declare_parameter('linear_axis', 3)
        self.declare_parameter('angular_axis', 0)
        self.declare_parameter('loop_rate', 10.0)
        self.declare_parameter('frame_id', 'map')
        self.declare_parameter('marker_namespace', 'waypoints')
        self.declare_parameter('publish_marker_on_failure', True)

        self.settings = RecorderSettings(
            waypoints_csv=os.path.expanduser(self.get_parameter('waypoints_csv').value),
            save_button=self.get_parameter('save_button').value,
            linear_axis=self.get_parameter('linear_axis').value,
            angular_axis=self.get_parameter('angular_axis').value,
            publish_marker_on_failure=self.get_parameter('publish_marker_on_failure').value,
        )
        self.frame_id = self.get_parameter('frame_id').value
        self.marker_namespace = self.get_parameter('marker_namespace').value
        loop_rate = self.get_parameter('loop_rate').value

        # Pose, save flag, marker id and pending events
        self.context = RecorderContext()

        # Subscriptions
        self.joy_sub = self.create_subscription(Joy, 'joy', self.joy_callback, 10)
        self.pose_sub = self.create_subscription(
            PoseWithCovarianceStamped, 'amcl_pose', self.pose_callback, 10)

        # Publishers
        self.marker_pub = self.create_publisher(Marker, 'waypoint_markers', 10)
        self.cmd_vel_pub = self.create_publisher(Twist, 'cmd_vel', 10)

        self.report_waypoints_file()

        self.timer = self.create_timer(loop_period(loop_rate, self.get_logger()), self.timer_callback)
        self.get_logger().info(
            f'Press button {self.settings.save_button} to save the current pose as a waypoint.')

    def report_waypoints_file(self):
        path = self.settings.waypoints_csv
        if not os.path.exists(path):
            self.get_logger().info(f'Waypoints will be saved to new CSV file: {path}')
            return

        try:
            count = len(read_waypoints(path))
        except (OSError, ValueError, IndexError) as e:
            self.get_logger().warn(f'Could not read existing waypoint CSV file {path}: {e}')
            return
        self.get_logger().info(f'Appending to existing waypoint CSV file: {path} ({count} waypoints)')

    def joy_callback(self, msg):
        self.context.inbox.append(GamepadEvent(buttons=list(msg.buttons), axes=list(msg.axes)))

    def pose_callback(self, msg):
        pose = msg.pose.pose
        self.context.inbox.append(PoseEvent(
            x=pose.position.x,
            y=pose.position.y,
            z=pose.orientation.z,
            w=pose.orientation.w,
        ))
        self.get_logger().debug(f'Position: x = {pose.position.x:f}, y = {pose.position.y:f}')
        self.get_logger().debug(f'Orientation: z = {pose.orientation.z:f}, w = {pose.orientation.w:f}')

    def timer_callback(self):
        # Joystick messages wait in the inbox until this tick, so teleop latency is up to 1 / loop_rate.
        result = tick(self.context, self.settings, self.get_logger())
        publish_tick_result(
            result,
            self.cmd_vel_pub,
            self.marker_pub,
            self.frame_id,
            self.marker_namespace,
            self.get_clock().now().to_msg(),
        )


def main(args=None):
    rclpy.init(args=args)
    try:
        node = WaypointRecorder()
    except ValueError:
        rclpy.shutdown()
        return

    try:
        rclpy.spin(node)
    except KeyboardInterrupt:
        print('Received KeyboardInterrupt, shutting down...')
    finally:
        node.destroy_node()
        rclpy.shutdown()


if __name__ == '__main__':
    main()
