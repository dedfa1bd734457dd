"""FitZone gym management API"""
