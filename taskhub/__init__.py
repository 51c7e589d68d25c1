"""Grouping trees and team notifications for the task hub API."""
