"""Page models for the public site and the admin panel."""
