"""pomidoro - a cyclic pomodoro clock served over a local datagram socket."""

__version__ = "0.1.0"
