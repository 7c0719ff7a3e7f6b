"""Courses REST API: users, courses and Basic-auth protected mutations."""
