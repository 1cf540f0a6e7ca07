"""Local web page for the news panel."""
