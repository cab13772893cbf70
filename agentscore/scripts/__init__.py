# Maintenance scripts
