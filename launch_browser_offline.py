"""Launch the artwork browser over generated demo data, no network needed."""

import artwork_browser as ab
from artwork_browser.config import configure_logging
from artwork_browser.source.frame import FrameRowSource, demo_artworks

configure_logging("INFO")

frame = demo_artworks(n_rows=240)
print(f"Demo table: {len(frame)} artworks")
print("Launching browser...")

ab.browse(source=FrameRowSource(frame))
