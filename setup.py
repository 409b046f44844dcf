from setuptools import find_packages, setup

package_name = 'waypoint_maker_py'

setup(
    name=package_name,
    version='0.0.1',
    packages=find_packages(exclude=['test']),
    data_files=[
        ('share/ament_index/resource_index/packages', ['resource/' + package_name]),
        ('share/' + package_name, ['package.xml']),
        ('share/' + package_name + '/config', ['config/recorder_config.yaml']),
        ('share/' + package_name + '/launch', ['launch/waypoint_recorder.launch.py']),
    ],
    install_requires=['setuptools'],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=True,
    maintainer='kazuma',
    maintainer_email='kazuma@todo.todo',
    description='Record joystick-triggered waypoints from the localized pose to CSV',
    license='TODO: License declaration',
    tests_require=['pytest'],
    entry_points={
        'console_scripts': [
            'waypoint_recorder = waypoint_maker_py.waypoint_recorder:main',
        ],
    },
)
