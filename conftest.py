import os
import sys

# Makes `gremlinrunner` importable when running pytest from a source checkout.
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__))))
