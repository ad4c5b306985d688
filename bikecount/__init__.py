"""
bikecount: canonical per-location statistics for bicycle counters.
"""
