"""python -m vehicle_log"""

from vehicle_log.main import run

run()
