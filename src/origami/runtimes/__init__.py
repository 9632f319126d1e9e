"""Support code shipped with compiled Origami programs."""
