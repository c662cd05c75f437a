"""Python platform setup.

Installs the template support mixins and the naming conventions of the
generated Python modules.
"""

import re

from mdagen.meta.support import install_template_support


def module_name(self):
    return re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", self.name).lower()


def module_path(self):
    if self.in_root_package:
        return self.module_name
    return f"{self.package_identifier}.{self.module_name}"


def service_path(self):
    file_name = f"{self.module_name}_service.py"
    if self.in_root_package:
        return file_name
    return f"{self.package_dir_name}/{file_name}"


def init_platform(context):
    install_template_support(context["options"])
    context["model"].mixin({"on_class": {"get": [module_name, module_path, service_path]}})


def init_project_templates(context):
    context["entity_names"] = [c.class_name_with_path for c in context.get("entities", [])]
