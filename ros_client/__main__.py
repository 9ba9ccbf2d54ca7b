#!/usr/bin/env python3
"""RouterOS API client"""

from ros_client.ros_client import main

if __name__ == '__main__':
	main()
