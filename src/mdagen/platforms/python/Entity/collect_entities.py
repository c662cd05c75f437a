"""Collects entity classes for the project templates."""


def init_stereotype(context, stereotype):
    context.setdefault("entities", [])


def init_class(context, meta_class):
    context["entities"].append(meta_class)
