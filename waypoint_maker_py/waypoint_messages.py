from geometry_msgs.msg import Twist
from visualization_msgs.msg import Marker


def build_twist(command):
    twist = Twist()
    twist.linear.x = float(command.linear_x)
    twist.angular.z = float(command.angular_z)
    return twist


def build_arrow_marker(marker_id, pose, frame_id, ns, stamp=None):
    marker = Marker()
    marker.header.frame_id = frame_id
    if stamp is not None:
        marker.header.stamp = stamp
    marker.ns = ns
    marker.id = marker_id
    marker.type = Marker.ARROW
    marker.action = Marker.ADD
    marker.pose.position.x = float(pose.x)
    marker.pose.position.y = float(pose.y)
    marker.pose.orientation.z = float(pose.z)
    marker.pose.orientation.w = float(pose.w)

    # Arrow length, width, height
    marker.scale.x = 0.3
    marker.scale.y = 0.1
    marker.scale.z = 0.0

    # Solid red
    marker.color.r = 1.0
    marker.color.g = 0.0
    marker.color.b = 0.0
    marker.color.a = 1.0
    return marker


def publish_tick_result(result, cmd_vel_pub, marker_pub, frame_id, ns, stamp=None):
    """Publish one Twist per drained gamepad event, then the save marker if any."""
    for command in result.commands:
        cmd_vel_pub.publish(build_twist(command))

    # No marker for a failed write when publish_marker_on_failure is false.
    if result.save is not None and result.save.marker_id is not None:
        marker_pub.publish(build_arrow_marker(result.save.marker_id, result.save.pose, frame_id, ns, stamp))
