"""Launch the artwork browser against the Art Institute of Chicago API."""

import artwork_browser as ab
from artwork_browser.config import BrowserConfig, configure_logging

config = BrowserConfig.from_env()
configure_logging(config.log_level)

print(f"Artworks API: {config.api_url} ({config.page_size} rows per page)")
print("Launching browser...")

ab.browse()
