"""Portfolio content: hero, about, projects, skills, stats."""
