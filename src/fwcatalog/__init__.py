"""fwcatalog - firmware catalog scraper."""
