"""Java virtual machine invocation options."""

from __future__ import annotations

from typing import Sequence

from lvjb.config import Config
from lvjb.paths import expand_classpath


def jvm_options(config: Config) -> list[str]:
    """Options for starting the JVM: checked JNI, the expanded classpath, then user flags."""
    return [
        "-Xcheck:jni",
        f"-Djava.class.path={expand_classpath(config.classpath)}",
        *(config.args.jvm or []),
    ]


def java_command(config: Config, class_name: str, args: Sequence[str]) -> list[str]:
    """Command line that runs ``class_name``'s main method with ``args``."""
    return ["java", *jvm_options(config), class_name, *args]