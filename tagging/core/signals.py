"""
Signals sent by the tagging service.

Signals decouple the tagging core from whoever wants to react to tag changes
(search indexing, caches, activity streams). The sender is always the tagged
entity.

Подписка:
    from tagging.core.signals import tag_added

    @tag_added.connect
    def on_tag_added(entity, **kwargs):
        ...
"""

from blinker import Namespace

signals = Namespace()

#: Sent after a tag has been applied to an entity.
tag_added = signals.signal("tagging:tag-added")

#: Sent after a tag has been removed from an entity.
tag_removed = signals.signal("tagging:tag-removed")
