# %%

import logging
import sys

from gridLookup import LookupConfig, LookupSession
from gridLookup.infrastructure import Timer


# usage: python main.py [config.yaml] [lat,lon ...]
config_path = sys.argv[1] if len(sys.argv) > 1 else "./config.example.yaml"
queries = sys.argv[2:] or ["0.5,0.5", "0.0,0.0", "1.25,0.75"]

config = LookupConfig.from_file(config_path)
logging.basicConfig(level=logging.DEBUG if config.debug_mode else logging.INFO)

timer = Timer("load")
timer.start()
session = LookupSession(config)
timer.stop()

print("Main, samples loaded:", len(session.table))

timer = Timer("queries")
timer.start()
for q in queries:
     lat, lon = (float(v) for v in q.split(","))
     print(f"Main, value at ({lat}, {lon}): {session.get(lat, lon)}")
timer.stop()

print("Main, cache entries:", len(session.cache), "hits:", session.cache.hits, "misses:", session.cache.misses)

if False:
     from gridLookup.infrastructure.plotting import visualize

     visualize(session, session.table, resolution=80, label="Depth (m)", invalid_value=config.invalid_value)
