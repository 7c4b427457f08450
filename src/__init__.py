"""Haxe build orchestration for ahead-of-time compiled programs."""
