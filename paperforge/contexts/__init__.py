"""Bounded contexts: templating (template resolution, project setup) and submission."""
