"""Step registry and navigation for interactive installer front ends."""