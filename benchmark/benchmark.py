import statistics
import time

from suite import build_suite

time_taken = []
for _ in range(100):
    start = time.time()

    ### CODE IN BETWEEN THESE LINES IS PROFILED ###

    build_suite()

    ### CODE IN BETWEEN THESE LINES IS PROFILED ###

    end = time.time()
    time_taken.append(end - start)


print(
    f"Time taken: {statistics.mean(time_taken)}, averaged across {len(time_taken)} runs with stdev {statistics.stdev(time_taken)}"
)
