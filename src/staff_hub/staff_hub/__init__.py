"""Staff Hub package.

HR back office for a multi-venue leisure business: employee records, the
weekly rota, holiday requests, payroll export, appraisals, to-do tasks, stock
requests and employee-of-the-month nominations. Organized by feature modules
with a thin Flask controller layer over service/repository layers.
"""
