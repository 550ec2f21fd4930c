"""Notification targeting and delivery service.

Keeps ``app`` a regular package so it is never resolved as a namespace
package against unrelated modules installed in site-packages.
"""
