import cProfile
import logging

from suite import build_suite

# the re-canonicalization records show how often merges have to start over
logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

# Create a Profile object
profiler = cProfile.Profile()

# Start profiling
profiler.enable()

### CODE IN BETWEEN THESE LINES IS PROFILED ###

build_suite()

### CODE IN BETWEEN THESE LINES IS PROFILED ###

profiler.disable()

# Print stats sorted by cumulative time
profiler.print_stats(sort="cumtime")
