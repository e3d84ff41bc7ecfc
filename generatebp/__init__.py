"""
generatebp: Soong module generation for Gradle-resolved Android dependencies.

Converts a resolved set of Java/Android library dependencies into Android.bp
module declarations and stages the matching jars and aars under libs/.
"""

__version__ = "1.0.0"
__author__ = "generatebp Team"
