#!/usr/bin/env python
# coding: utf-8

from . import annotation, coordinates, events, plot, rotation, sequence, viewer, widget

Annotation = annotation.Annotation
AnnotationStore = annotation.AnnotationStore
InvalidAnnotationError = annotation.InvalidAnnotationError
CoordinateMapper = coordinates.CoordinateMapper
RotationController = rotation.RotationController
EventDispatcher = events.EventDispatcher
CircularFeatureViewer = viewer.CircularFeatureViewer
